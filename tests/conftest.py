"""Shared pytest fixtures for medprice tests."""

from __future__ import annotations

import pytest

# Excerpt shaped like the text layer of a supplier price-list PDF: a header row,
# glued tokens, one row spread over three lines, two rows sharing one line,
# and a footer disclaimer.
SAMPLE_PRICE_LIST_LINES = [
    "Item Code Item Description Pack Size Tax Code Selling Price",
    "GSKP0013TC Tablets (Epivir) 150mg 60s60s0.004,800.2",
    "MCLB063Olmat Tablets 20mg 28s0.001,590.95",
    "XYZ100 Amoxicillin",
    "Capsules",
    "500 mg 20s 0.00 350.00",
    "ABC123 Paracetamol 0.00 10.00 DEF456 Ibuprofen 0.16 25.50",
    "NB: PRICES ARE SUBJECT TO CHANGE WITHOUT NOTICE",
]


@pytest.fixture
def price_list_lines() -> list[str]:
    return list(SAMPLE_PRICE_LIST_LINES)
