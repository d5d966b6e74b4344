"""Composable price-list extraction components."""

from .extractor import (
    PriceListParseState,
    dedupe_by_item_code,
    extract_buffered_records,
    extract_price_list,
    feed_line,
    finish,
    is_skipped_line,
    salvage_records,
)
from .item_codes import ItemCodeMatch, detect_item_code, is_item_code
from .normalization import normalize_line
from .row_parser import parse_price_list_row
from .segmentation import LineSegments, segment_line
from .settings import DEFAULT_SETTINGS, ExtractionSettings, build_extraction_settings

__all__ = [
    "DEFAULT_SETTINGS",
    "ExtractionSettings",
    "ItemCodeMatch",
    "LineSegments",
    "PriceListParseState",
    "build_extraction_settings",
    "dedupe_by_item_code",
    "detect_item_code",
    "extract_buffered_records",
    "extract_price_list",
    "feed_line",
    "finish",
    "is_item_code",
    "is_skipped_line",
    "normalize_line",
    "parse_price_list_row",
    "salvage_records",
    "segment_line",
]
