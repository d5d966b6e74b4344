"""Item-code detection for price-list tokens."""

import re
from dataclasses import dataclass

# Strength/size annotations such as "MG60" or "ML500" are never item codes.
UNIT_PREFIXES = frozenset({"MG", "ML", "G", "KG", "L", "LT", "CM", "MM", "MCG", "UG", "IU"})

MIN_CODE_LETTERS = 3
MAX_CODE_SUFFIX = 6

_NON_CODE_CHARS = re.compile(r"[^A-Za-z0-9-]")
_CODE_BASE = re.compile(r"^[A-Z]{3,}[A-Za-z0-9-]*\d+", re.IGNORECASE)
_LEADING_LETTERS = re.compile(r"^[A-Z]+")
_SUFFIX_CHAR = re.compile(r"[A-Z0-9-]")


@dataclass(frozen=True)
class ItemCodeMatch:
    """Detected item code and how many whitespace tokens it spans."""

    code: str
    tokens_consumed: int = 1


def _has_unit_prefix(code: str) -> bool:
    match = _LEADING_LETTERS.match(code)
    if not match:
        return True
    prefix = match.group(0)
    return len(prefix) < MIN_CODE_LETTERS or prefix in UNIT_PREFIXES


def _extract_code(raw: str) -> str | None:
    """Pull a code off the front of one raw token, case preserved until the end."""
    cleaned = _NON_CODE_CHARS.sub("", raw or "")
    match = _CODE_BASE.match(cleaned)
    if not match:
        return None
    base = match.group(0)

    # Lowercase marks the start of a glued brand name, so the suffix stops there.
    suffix = ""
    for ch in cleaned[len(base) : len(base) + MAX_CODE_SUFFIX]:
        if not _SUFFIX_CHAR.fullmatch(ch):
            break
        suffix += ch
    # A lone capital is usually the first letter of a brand ("L" in "Ldnil").
    if len(suffix) < 2:
        suffix = ""

    code = (base + suffix).upper()
    return None if _has_unit_prefix(code) else code


def detect_item_code(token: str, next_token: str = "") -> ItemCodeMatch | None:
    """Return the item code starting at ``token``, or None.

    Codes split across a token boundary ("ABCG 10") are recovered by retrying
    against the two tokens joined together.
    """
    code = _extract_code(token)
    if code:
        return ItemCodeMatch(code=code, tokens_consumed=1)
    if next_token:
        code = _extract_code(token + next_token)
        if code:
            return ItemCodeMatch(code=code, tokens_consumed=2)
    return None


def is_item_code(token: str) -> bool:
    return detect_item_code(token) is not None
