"""Price-list import workflow orchestration."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from medprice.domain.medication import ImportCounts, MedicationRecord, WritePolicy
from medprice.pricelist import ExtractionSettings, extract_price_list, normalize_line, parse_price_list_row
from medprice.runtime import (
    MedicationStore,
    StoreError,
    TextExtractionError,
    extract_pdf_lines,
    get_logger,
    load_extraction_settings,
)

logger = get_logger(__name__)

WRITE_POLICIES: tuple[WritePolicy, ...] = ("insert_missing", "update")
PROGRESS_EVERY = 200

ImportStatus = Literal[
    "file_not_found",
    "extraction_failed",
    "invalid_filter",
    "dry_run",
    "imported",
]


@dataclass(frozen=True)
class PriceListImportRequest:
    """Inputs for running a price-list import."""

    document_path: Path
    policy: WritePolicy = "insert_missing"
    limit: int = 0
    dry_run: bool = False
    filter_pattern: str | None = None


@dataclass(frozen=True)
class LineDiagnostic:
    """A raw line matching the preview filter and what direct extraction made of it."""

    line_number: int
    line: str
    record: MedicationRecord | None


@dataclass(frozen=True)
class PriceListImportResult:
    """Outcome from a price-list import."""

    status: ImportStatus
    records: list[MedicationRecord] = field(default_factory=list)
    parsed_count: int = 0
    counts: ImportCounts | None = None
    filtered: list[MedicationRecord] = field(default_factory=list)
    diagnostics: list[LineDiagnostic] = field(default_factory=list)
    error: str | None = None


def apply_write_policy(
    records: Iterable[MedicationRecord],
    store: MedicationStore,
    policy: WritePolicy,
) -> ImportCounts:
    """
    Write records to the store under one policy, one call per record.

    insert_missing leaves existing codes untouched and counts them as skipped.
    update upserts every code, counting it as updated when it existed before
    the write and inserted otherwise. A failed write is logged and counted,
    and the run carries on with the next record.
    """
    if policy not in WRITE_POLICIES:
        raise ValueError(f"Unknown write policy: {policy!r}")

    counts = ImportCounts()
    for record in records:
        try:
            existed = store.exists(record.item_code)
            if policy == "insert_missing":
                if existed:
                    counts.skipped += 1
                    continue
                store.insert(record)
                counts.inserted += 1
            else:
                store.upsert_by_code(record)
                if existed:
                    counts.updated += 1
                else:
                    counts.inserted += 1
        except StoreError as e:
            counts.errors += 1
            logger.error("Failed to write %s: %s", record.item_code, e)
            continue

        if counts.written % PROGRESS_EVERY == 0:
            logger.info(
                "... progress: inserted=%d, updated=%d, skipped=%d",
                counts.inserted,
                counts.updated,
                counts.skipped,
            )
    return counts


def filter_records(records: Sequence[MedicationRecord], pattern: re.Pattern[str]) -> list[MedicationRecord]:
    """Records whose code or description matches the preview filter."""
    return [r for r in records if pattern.search(r.item_code) or pattern.search(r.item_description)]


def diagnose_lines(
    lines: Sequence[str],
    pattern: re.Pattern[str],
    settings: ExtractionSettings,
) -> list[LineDiagnostic]:
    """Try direct extraction on every normalized line the filter matches."""
    diagnostics: list[LineDiagnostic] = []
    for idx, raw_line in enumerate(lines, start=1):
        line = normalize_line(raw_line)
        if line and pattern.search(line):
            diagnostics.append(
                LineDiagnostic(line_number=idx, line=line, record=parse_price_list_row(line, settings))
            )
    return diagnostics


def run_price_list_import(
    request: PriceListImportRequest,
    store: MedicationStore | None = None,
    *,
    read_lines: Callable[[Path], list[str]] = extract_pdf_lines,
    settings: ExtractionSettings | None = None,
) -> PriceListImportResult:
    """Run import flow: read lines -> extract -> dedupe -> (optional) write."""
    if not request.document_path.exists():
        return PriceListImportResult(
            status="file_not_found",
            error=f"Price list not found: {request.document_path}",
        )
    if not request.dry_run and store is None:
        raise ValueError("A medication store is required unless dry_run is set")

    pattern: re.Pattern[str] | None = None
    if request.filter_pattern:
        try:
            pattern = re.compile(request.filter_pattern, re.IGNORECASE)
        except re.error as exc:
            return PriceListImportResult(status="invalid_filter", error=f"Invalid filter: {exc}")

    if settings is None:
        settings = load_extraction_settings()

    try:
        lines = read_lines(request.document_path)
    except TextExtractionError as exc:
        logger.error("%s", exc)
        return PriceListImportResult(status="extraction_failed", error=str(exc))

    parsed = extract_price_list(lines, settings)
    logger.info("Parsed %d candidate rows from %d lines", len(parsed), len(lines))

    # The filter searches every parsed row; the limit only caps what is written.
    filtered: list[MedicationRecord] = []
    diagnostics: list[LineDiagnostic] = []
    if pattern is not None:
        filtered = filter_records(parsed, pattern)
        if not filtered:
            diagnostics = diagnose_lines(lines, pattern, settings)

    records = parsed[: request.limit] if request.limit > 0 else parsed

    if request.dry_run:
        return PriceListImportResult(
            status="dry_run",
            records=records,
            parsed_count=len(parsed),
            filtered=filtered,
            diagnostics=diagnostics,
        )

    assert store is not None
    logger.info(
        "Import mode: %s",
        "UPSERT (update existing)" if request.policy == "update" else "INSERT MISSING ONLY",
    )
    counts = apply_write_policy(records, store, request.policy)
    logger.info(
        "Done. inserted=%d, updated=%d, skipped=%d, errors=%d",
        counts.inserted,
        counts.updated,
        counts.skipped,
        counts.errors,
    )
    return PriceListImportResult(
        status="imported",
        records=records,
        parsed_count=len(parsed),
        counts=counts,
        filtered=filtered,
        diagnostics=diagnostics,
    )
