"""Runtime infrastructure for medprice.

This package provides process/runtime services including:
- Logging setup via get_logger()
- Path resolution via get_paths(), ProjectPaths
- Extraction tunables via load_extraction_settings()
- Raw text extraction from PDFs via extract_pdf_lines()
- Medication store backends (in-memory, JSON file, HTTP catalog)

Usage:
    from medprice.runtime import get_logger, get_paths

    logger = get_logger(__name__)
    paths = get_paths()
    print(paths.root, paths.medication_store)
"""

from medprice.runtime.catalog_client import HttpMedicationStore
from medprice.runtime.extraction_rules import load_extraction_settings
from medprice.runtime.logging import configure_logging, get_logger, set_log_level
from medprice.runtime.medication_store import (
    InMemoryMedicationStore,
    JsonFileMedicationStore,
    MedicationStore,
    StoreError,
    record_to_row,
)
from medprice.runtime.paths import ProjectPaths, get_paths, reset_paths
from medprice.runtime.pdf_text import TextExtractionError, extract_pdf_lines

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_log_level",
    # Rules
    "load_extraction_settings",
    # Paths
    "get_paths",
    "reset_paths",
    "ProjectPaths",
    # Text extraction
    "extract_pdf_lines",
    "TextExtractionError",
    # Stores
    "MedicationStore",
    "InMemoryMedicationStore",
    "JsonFileMedicationStore",
    "HttpMedicationStore",
    "StoreError",
    "record_to_row",
]
