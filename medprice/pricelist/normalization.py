"""Canonical rewriting of raw price-list text lines.

The rules run in a fixed order; later rules assume the earlier ones already
separated quotes, pack counts and units.
"""

import re

UNIT_WORDS = r"ml|g|mg|l|litres?|liters?|vials?|amps?|tabs?|caps?"

_SINGLE_QUOTES = re.compile(r"[‘’‚‛′]")
_DOUBLE_QUOTES = re.compile(r"[“”„‟″]")
_TILDE_RUN = re.compile(r"~+")
_NOISE_PATTERNS = (
    re.compile(r"#REF!?|\bREF!", re.IGNORECASE),
    re.compile(r"\bNETT\b", re.IGNORECASE),
    re.compile(r"\bCOLD\s*CHAIN\b", re.IGNORECASE),
    re.compile(r"\bFRIDGE\b", re.IGNORECASE),
)
# "30's" / "30’s" -> "30s"
_POSSESSIVE_PACK = re.compile(r"(\d+)\s*['’]s\b", re.IGNORECASE)
# "30s30s" -> "30s 30s"
_REPEATED_PACK = re.compile(r"(\d+s)(?=\d)", re.IGNORECASE)
# "ml10" -> "ml 10"
_UNIT_BEFORE_DIGIT = re.compile(rf"({UNIT_WORDS})(?=\d)", re.IGNORECASE)
# "10ml" -> "10 ml"
_UNIT_AFTER_DIGIT = re.compile(rf"(?<=\d)({UNIT_WORDS})", re.IGNORECASE)
# "0.001,590.9" -> "0.00 1,590.9"
_GLUED_TAX_PRICE = re.compile(r"(\d+\.\d{2})(?=[\d,])")
# "MCLB063Olmat" -> "MCLB063 Olmat"
_GLUED_CODE_BRAND = re.compile(r"([A-Z]{3,}[A-Za-z0-9-]*\d)([A-Za-z]+)")
_WHITESPACE_RUN = re.compile(r"\s{2,}")


def normalize_line(raw: str | None) -> str:
    """Rewrite one extracted line into canonical form ("" for blank input)."""
    text = raw or ""
    text = _SINGLE_QUOTES.sub("'", text)
    text = _DOUBLE_QUOTES.sub('"', text)
    text = _TILDE_RUN.sub("-", text)
    for pattern in _NOISE_PATTERNS:
        text = pattern.sub("", text)
    text = _POSSESSIVE_PACK.sub(r"\1s", text)
    text = _REPEATED_PACK.sub(r"\1 ", text)
    text = _UNIT_BEFORE_DIGIT.sub(r"\1 ", text)
    text = _UNIT_AFTER_DIGIT.sub(r" \1", text)
    text = _GLUED_TAX_PRICE.sub(r"\1 ", text)
    text = _GLUED_CODE_BRAND.sub(r"\1 \2", text)
    text = _WHITESPACE_RUN.sub(" ", text)
    return text.strip()
