"""Price-list command handlers used by the unified CLI."""

import argparse
from pathlib import Path

from medprice.application.imports.price_list import PriceListImportRequest, run_price_list_import
from medprice.domain.medication import MedicationRecord
from medprice.runtime import (
    HttpMedicationStore,
    JsonFileMedicationStore,
    MedicationStore,
    StoreError,
    get_logger,
    get_paths,
)

logger = get_logger(__name__)

DEFAULT_PREVIEW_ROWS = 20


def format_record(record: MedicationRecord) -> str:
    return (
        f"{record.item_code} | {record.item_description} | {record.pack_size or '-'}"
        f" | tax={record.tax_code} | price={record.price}"
    )


def _open_store(args: argparse.Namespace) -> MedicationStore:
    if args.store_url:
        return HttpMedicationStore(args.store_url)
    store_path = Path(args.store) if args.store else get_paths().medication_store
    return JsonFileMedicationStore(store_path)


def cmd_import(args: argparse.Namespace) -> int:
    """Parse a price list and write it to the medication store."""
    document_path = Path(args.pdf) if args.pdf else get_paths().default_price_list

    store: MedicationStore | None = None
    if not args.dry_run:
        try:
            store = _open_store(args)
        except StoreError as exc:
            logger.error("%s", exc)
            print(f"Error: {exc}")
            return 1

    try:
        result = run_price_list_import(
            PriceListImportRequest(
                document_path=document_path,
                policy="update" if args.update else "insert_missing",
                limit=args.limit,
                dry_run=args.dry_run,
                filter_pattern=args.filter,
            ),
            store,
        )
    finally:
        if isinstance(store, HttpMedicationStore):
            store.close()

    if result.status in ("file_not_found", "extraction_failed", "invalid_filter"):
        print(f"Error: {result.error}")
        return 1

    print(f"Parsed {result.parsed_count} candidate rows")

    if args.filter:
        print(f'Filter "{args.filter}" matched {len(result.filtered)} rows:')
        for i, record in enumerate(result.filtered, 1):
            print(f"{i}. {format_record(record)}")
        if not result.filtered:
            if not result.diagnostics:
                print("No raw line matches found for this filter.")
            for diag in result.diagnostics:
                print(f'Line {diag.line_number}: "{diag.line}"')
                if diag.record is not None:
                    print(f"  -> {format_record(diag.record)}")
                else:
                    print("  -> FAILED")

    preview_rows = args.limit if args.limit > 0 else DEFAULT_PREVIEW_ROWS
    for i, record in enumerate(result.records[:preview_rows], 1):
        print(f"{i}. {format_record(record)}")

    if result.status == "dry_run":
        print("\nDry-run: no store changes were made.")
        return 0

    counts = result.counts
    assert counts is not None
    print(
        f"\nDone. inserted={counts.inserted}, updated={counts.updated}, "
        f"skipped={counts.skipped}, errors={counts.errors}"
    )
    return 0
