"""Region resolver base class and factory."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from ..models import RegionMatch

if TYPE_CHECKING:
    from ..config import IntakeConfig


class RegionResolver(ABC):
    """Maps free-form address text to structured administrative fields."""

    @abstractmethod
    async def resolve(self, address: str) -> RegionMatch | None:
        """Resolve an address, or return None when nothing matches."""
        ...


class NullRegionResolver(RegionResolver):
    """Resolver used when no gazetteer is configured."""

    async def resolve(self, address: str) -> RegionMatch | None:
        return None


def create_resolver(config: IntakeConfig) -> RegionResolver:
    """Create a region resolver based on configuration."""
    if not config.region.enabled:
        return NullRegionResolver()

    if not config.region.gazetteer_path:
        raise ValueError(
            "Path data wilayah belum diatur. "
            "Isi region.gazetteer_path pada file konfigurasi."
        )

    from .gazetteer import GazetteerRegionResolver

    return GazetteerRegionResolver(config.region.gazetteer_path)


__all__ = [
    "RegionResolver",
    "NullRegionResolver",
    "RegionMatch",
    "create_resolver",
]
