"""Freeform order text intake for Lyncis."""

from .assembler import OrderAssembler, parse_orders
from .config import (
    FallbackConfig,
    IntakeConfig,
    RegionConfig,
    ScoringConfig,
    ScoringWeights,
    SegmenterConfig,
    load_config,
)
from .contact import split_contact
from .fallback import FallbackExtractor, create_extractor
from .items import ExtractItemsResult, LineClaims, extract_items
from .models import Contact, ExtractedItem, PartialOrder, RegionMatch
from .pipeline import IntakePipeline, IntakeResult, should_escalate
from .pricing import normalize_price
from .region import NullRegionResolver, RegionResolver, create_resolver
from .scoring import count_potential_items, score_confidence
from .segmenter import segment_blocks
from .validator import ValidationResult, validate_batch, validate_order

__all__ = [
    "parse_orders",
    "OrderAssembler",
    "IntakeConfig",
    "SegmenterConfig",
    "ScoringConfig",
    "ScoringWeights",
    "RegionConfig",
    "FallbackConfig",
    "load_config",
    "normalize_price",
    "extract_items",
    "ExtractItemsResult",
    "LineClaims",
    "split_contact",
    "segment_blocks",
    "score_confidence",
    "count_potential_items",
    "ExtractedItem",
    "Contact",
    "RegionMatch",
    "PartialOrder",
    "RegionResolver",
    "NullRegionResolver",
    "create_resolver",
    "FallbackExtractor",
    "create_extractor",
    "IntakePipeline",
    "IntakeResult",
    "should_escalate",
    "ValidationResult",
    "validate_order",
    "validate_batch",
]
