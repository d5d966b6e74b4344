"""Tunables for price-list extraction."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

# Table headers, page banners and disclaimers repeated on every page.
DEFAULT_SKIP_MARKERS: tuple[str, ...] = (
    "Item Code",
    "Item Description",
    "Pack Size",
    "Tax Code",
    "Selling Price",
    "Updated Inventory",
    "OMAERA",
    "NB: PRICES",
)

# Buffer length after which an early extraction is attempted.
DEFAULT_FLUSH_LENGTH = 120
# Chunks shorter than this never hold a full row; config may only raise it.
DEFAULT_MIN_CHUNK_LENGTH = 12
# VAT-like rates above this are schema-invalid; config may only lower it.
DEFAULT_MAX_TAX_RATE = Decimal("0.25")


@dataclass(frozen=True)
class ExtractionSettings:
    """In-memory extraction tunables."""

    flush_length: int = DEFAULT_FLUSH_LENGTH
    min_chunk_length: int = DEFAULT_MIN_CHUNK_LENGTH
    max_tax_rate: Decimal = DEFAULT_MAX_TAX_RATE
    skip_markers: tuple[str, ...] = DEFAULT_SKIP_MARKERS

    def __post_init__(self) -> None:
        if self.flush_length <= 0:
            raise ValueError(f"flush_length must be positive, got {self.flush_length}")
        if self.min_chunk_length < DEFAULT_MIN_CHUNK_LENGTH:
            raise ValueError(f"min_chunk_length must be at least {DEFAULT_MIN_CHUNK_LENGTH}")
        if not Decimal("0") <= self.max_tax_rate <= DEFAULT_MAX_TAX_RATE:
            raise ValueError(f"max_tax_rate must be within [0, {DEFAULT_MAX_TAX_RATE}]")


DEFAULT_SETTINGS = ExtractionSettings()


def _positive_int(raw: Any, fallback: int, minimum: int = 1) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return fallback
    return value if value >= minimum else fallback


def _tax_rate(raw: Any, fallback: Decimal) -> Decimal:
    try:
        value = Decimal(str(raw))
    except InvalidOperation:
        return fallback
    if not value.is_finite() or not Decimal("0") <= value <= DEFAULT_MAX_TAX_RATE:
        return fallback
    return value


def build_extraction_settings(configs: Sequence[Mapping[str, Any]] | None = None) -> ExtractionSettings:
    """Layer config mappings over the built-in defaults, later layers winning.

    Recognized keys live under an ``[extraction]`` table: ``flush_length``,
    ``min_chunk_length``, ``max_tax_rate`` and ``skip_markers`` (appended to the
    defaults, never replacing them).
    """
    flush_length = DEFAULT_FLUSH_LENGTH
    min_chunk_length = DEFAULT_MIN_CHUNK_LENGTH
    max_tax_rate = DEFAULT_MAX_TAX_RATE
    markers = list(DEFAULT_SKIP_MARKERS)

    for config in configs or ():
        section = config.get("extraction", {})
        if not isinstance(section, Mapping):
            continue
        if "flush_length" in section:
            flush_length = _positive_int(section["flush_length"], flush_length)
        if "min_chunk_length" in section:
            min_chunk_length = _positive_int(section["min_chunk_length"], min_chunk_length, DEFAULT_MIN_CHUNK_LENGTH)
        if "max_tax_rate" in section:
            max_tax_rate = _tax_rate(section["max_tax_rate"], max_tax_rate)
        raw_markers = section.get("skip_markers", [])
        if isinstance(raw_markers, str):
            raw_markers = [raw_markers]
        for raw in raw_markers:
            marker = str(raw).strip()
            if marker and marker not in markers:
                markers.append(marker)

    return ExtractionSettings(
        flush_length=flush_length,
        min_chunk_length=min_chunk_length,
        max_tax_rate=max_tax_rate,
        skip_markers=tuple(markers),
    )
