"""TOML configuration loader for the order intake module."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]


@dataclass
class SegmenterConfig:
    min_block_length: int = 3


@dataclass
class ScoringWeights:
    """Additive completeness weights; the total is capped at 1.0."""

    name: float = 0.35
    phone: float = 0.25
    address: float = 0.25
    items: float = 0.15
    priced_items: float = 0.05


@dataclass
class ScoringConfig:
    weights: ScoringWeights = field(default_factory=ScoringWeights)
    review_threshold: float = 0.85


@dataclass
class RegionConfig:
    enabled: bool = False
    gazetteer_path: str = ""
    min_confidence: float = 0.3


@dataclass
class ClaudeFallbackConfig:
    api_key: str = ""
    model: str = "claude-sonnet-4-5-20250929"


@dataclass
class GeminiFallbackConfig:
    api_key: str = ""
    model: str = "gemini-2.0-flash"


@dataclass
class FallbackConfig:
    enabled: bool = False
    backend: str = "gemini"
    timeout: float = 30.0
    claude: ClaudeFallbackConfig = field(default_factory=ClaudeFallbackConfig)
    gemini: GeminiFallbackConfig = field(default_factory=GeminiFallbackConfig)


@dataclass
class IntakeConfig:
    segmenter: SegmenterConfig = field(default_factory=SegmenterConfig)
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    region: RegionConfig = field(default_factory=RegionConfig)
    fallback: FallbackConfig = field(default_factory=FallbackConfig)


def load_config(path: str | Path | None = None) -> IntakeConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    API keys can be overridden via environment variables.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path)
        if p.exists():
            if tomllib is None:
                raise ImportError(
                    "tomli is required on Python < 3.11: pip install tomli"
                )
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    seg = raw.get("segmenter", {})
    sco = raw.get("scoring", {})
    reg = raw.get("region", {})
    fbk = raw.get("fallback", {})

    claude_cfg = fbk.get("claude", {})
    gemini_cfg = fbk.get("gemini", {})

    # Resolve API keys: config file → environment variable
    claude_api_key = claude_cfg.get("api_key", "") or os.environ.get(
        "ANTHROPIC_API_KEY", ""
    )
    gemini_api_key = gemini_cfg.get("api_key", "") or os.environ.get(
        "GEMINI_API_KEY", ""
    )

    defaults = ScoringWeights()

    return IntakeConfig(
        segmenter=SegmenterConfig(
            min_block_length=seg.get("min_block_length", 3),
        ),
        scoring=ScoringConfig(
            weights=ScoringWeights(
                name=sco.get("name", defaults.name),
                phone=sco.get("phone", defaults.phone),
                address=sco.get("address", defaults.address),
                items=sco.get("items", defaults.items),
                priced_items=sco.get("priced_items", defaults.priced_items),
            ),
            review_threshold=sco.get("review_threshold", 0.85),
        ),
        region=RegionConfig(
            enabled=reg.get("enabled", False),
            gazetteer_path=reg.get("gazetteer_path", ""),
            min_confidence=reg.get("min_confidence", 0.3),
        ),
        fallback=FallbackConfig(
            enabled=fbk.get("enabled", False),
            backend=fbk.get("backend", "gemini"),
            timeout=fbk.get("timeout", 30.0),
            claude=ClaudeFallbackConfig(
                api_key=claude_api_key,
                model=claude_cfg.get("model", "claude-sonnet-4-5-20250929"),
            ),
            gemini=GeminiFallbackConfig(
                api_key=gemini_api_key,
                model=gemini_cfg.get("model", "gemini-2.0-flash"),
            ),
        ),
    )
