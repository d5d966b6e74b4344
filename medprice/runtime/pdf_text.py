"""Raw text extraction from price-list PDFs."""

from pathlib import Path

from medprice.runtime.logging import get_logger

logger = get_logger(__name__)


class TextExtractionError(RuntimeError):
    """Raised when a document cannot be opened or its text layer read."""


def extract_pdf_lines(pdf_path: Path) -> list[str]:
    """Return the document's text lines in page order.

    Layout is whatever the PDF text layer yields; no column recovery is
    attempted here.
    """
    import pdfplumber

    lines: list[str] = []
    try:
        with pdfplumber.open(pdf_path) as pdf:
            for page in pdf.pages:
                page_text = page.extract_text() or ""
                lines.extend(page_text.split("\n"))
            page_count = len(pdf.pages)
    except Exception as exc:
        # pdfminer raises its own exception types for damaged files
        raise TextExtractionError(f"Failed to read text from {pdf_path}: {exc}") from exc

    logger.info("Extracted %d lines from %d pages of %s", len(lines), page_count, pdf_path)
    return lines
