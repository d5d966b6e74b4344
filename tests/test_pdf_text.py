"""Tests for PDF text-layer extraction."""

from __future__ import annotations

from pathlib import Path

import pdfplumber
import pytest

from medprice.runtime import TextExtractionError, extract_pdf_lines


class _FakePage:
    def __init__(self, text: str | None) -> None:
        self._text = text

    def extract_text(self) -> str | None:
        return self._text


class _FakePdf:
    def __init__(self, texts: list[str | None]) -> None:
        self.pages = [_FakePage(text) for text in texts]

    def __enter__(self) -> _FakePdf:
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None


def test_lines_follow_page_order(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    opened: list[Path] = []

    def _open(path: Path) -> _FakePdf:
        opened.append(path)
        return _FakePdf(["Item Code Item Description\nABC123 Paracetamol", None, "0.00 10.00\nDEF456 Ibuprofen"])

    monkeypatch.setattr(pdfplumber, "open", _open)
    pdf_path = tmp_path / "price_list.pdf"

    lines = extract_pdf_lines(pdf_path)

    assert opened == [pdf_path]
    assert lines == [
        "Item Code Item Description",
        "ABC123 Paracetamol",
        "",
        "0.00 10.00",
        "DEF456 Ibuprofen",
    ]


def test_unreadable_document_raises_extraction_error(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    def _open(path: Path) -> _FakePdf:
        raise ValueError("No /Root object! - Is this really a PDF?")

    monkeypatch.setattr(pdfplumber, "open", _open)

    with pytest.raises(TextExtractionError, match="No /Root object"):
        extract_pdf_lines(tmp_path / "broken.pdf")


def test_failing_page_raises_extraction_error(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    class _BrokenPage:
        def extract_text(self) -> str:
            raise KeyError("Font")

    fake = _FakePdf([])
    fake.pages = [_BrokenPage()]  # type: ignore[list-item]
    monkeypatch.setattr(pdfplumber, "open", lambda path: fake)

    with pytest.raises(TextExtractionError):
        extract_pdf_lines(tmp_path / "price_list.pdf")
