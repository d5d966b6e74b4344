"""Right-to-left extraction of one medication record from a text chunk.

Fields are peeled off the end of the chunk in a fixed order:

    price -> tax fraction -> pack phrases -> item code + description

Price goes first because tax fractions share its shape, and pack phrases go
before the code because their digits would otherwise be read into the code.
"""

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from medprice.domain.medication import MedicationRecord

from .item_codes import detect_item_code
from .normalization import UNIT_WORDS
from .settings import DEFAULT_SETTINGS, ExtractionSettings

# Trailing numeral with optional thousands separators and decimal part.
PRICE_TAIL = re.compile(r"(?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d+)?\s*$")
_TAX_CANDIDATE = re.compile(r"\d+\.\d{2}(?!\d)")
_ZERO_TAX_TAIL = re.compile(r"(?:^|\s)(0)\s*$")

_MEASURE_UNITS = r"ml|g|mg|l|litres?|liters?"
PACK_PATTERNS = (
    # "2 x 10 tabs", "3*5 ml"
    re.compile(rf"\b\d+\s*(?:x|\*|by)\s*\d+\s*(?:s|{UNIT_WORDS})\b$", re.IGNORECASE),
    # "500 ml", "2.5 g"
    re.compile(rf"\b\d+(?:\.\d+)?\s*(?:{_MEASURE_UNITS})\b$", re.IGNORECASE),
    # "30 tabs", "10 amps", "30s"
    re.compile(r"\b\d+\s*(?:tabs?|caps?|amps?|vials?|s)\b$", re.IGNORECASE),
    re.compile(r"\b\d+\s*'?s\b$", re.IGNORECASE),
)

_BRAND_LEADING_NOISE = re.compile(r"^[^A-Za-z+/-]+")
_BRAND_TRAILING_NOISE = re.compile(r"[^A-Za-z0-9+/-]+$")
_WHITESPACE_RUN = re.compile(r"\s{2,}")


@dataclass(frozen=True)
class _Peeled:
    value: Decimal
    head: str


def _peel_price(text: str) -> _Peeled | None:
    match = PRICE_TAIL.search(text)
    if not match:
        return None
    try:
        price = Decimal(match.group(0).strip().replace(",", ""))
    except InvalidOperation:
        return None
    if not price.is_finite() or price <= 0:
        return None
    return _Peeled(value=price, head=text[: match.start()].strip())


def _peel_tax(text: str, max_tax_rate: Decimal) -> _Peeled | None:
    """Take the right-most VAT-like fraction; a bare trailing "0" counts as zero."""
    for match in reversed(list(_TAX_CANDIDATE.finditer(text))):
        rate = Decimal(match.group(0))
        if Decimal("0") <= rate <= max_tax_rate:
            return _Peeled(value=rate, head=text[: match.start()].strip())

    zero = _ZERO_TAX_TAIL.search(text)
    if zero:
        return _Peeled(value=Decimal("0.00"), head=text[: zero.start(1)].strip())
    # No tax column means the "price" was probably a strength like "150".
    return None


def _peel_pack(text: str) -> tuple[str | None, str]:
    phrases: list[str] = []
    remaining = text
    while remaining:
        for pattern in PACK_PATTERNS:
            match = pattern.search(remaining)
            if match:
                phrases.insert(0, match.group(0).strip())
                remaining = remaining[: match.start()].strip()
                break
        else:
            break
    return (" ".join(phrases) if phrases else None), remaining


def _glued_brand(first_token: str, code: str) -> str:
    """Brand text fused onto the code token, e.g. "Olmat" in "MCLB063Olmat"."""
    if len(first_token) <= len(code):
        return ""
    raw_suffix = first_token[len(code) :]
    if not any(ch.isalpha() for ch in raw_suffix):
        return ""
    brand = _BRAND_LEADING_NOISE.sub("", raw_suffix)
    return _BRAND_TRAILING_NOISE.sub("", brand).strip()


def parse_price_list_row(chunk: str, settings: ExtractionSettings = DEFAULT_SETTINGS) -> MedicationRecord | None:
    """Extract one record from a normalized chunk, or None when it does not fit."""
    text = (chunk or "").strip()
    if len(text) < settings.min_chunk_length:
        return None

    price = _peel_price(text)
    if price is None:
        return None

    tax = _peel_tax(price.head, settings.max_tax_rate)
    if tax is None:
        return None

    pack_size, remaining = _peel_pack(tax.head)

    parts = remaining.split()
    if len(parts) < 2:
        return None
    code_match = detect_item_code(parts[0], parts[1])
    if code_match is None:
        return None

    brand = _glued_brand(parts[0], code_match.code)
    tail = " ".join(parts[code_match.tokens_consumed :])
    description = _WHITESPACE_RUN.sub(" ", " ".join(p for p in (brand, tail) if p)).strip()
    if len(description) < 2:
        return None

    return MedicationRecord(
        item_code=code_match.code,
        item_description=description,
        tax_code=tax.value,
        price=price.value,
        pack_size=pack_size,
    )
