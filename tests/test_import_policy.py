"""Tests for price-list import orchestration and write policies."""

from __future__ import annotations

import copy
from decimal import Decimal
from pathlib import Path

import pytest

from medprice.application.imports.price_list import (
    PriceListImportRequest,
    apply_write_policy,
    run_price_list_import,
)
from medprice.domain.medication import MedicationRecord
from medprice.pricelist import DEFAULT_SETTINGS, extract_price_list
from medprice.runtime import InMemoryMedicationStore, StoreError, TextExtractionError


def _record(code: str, price: str) -> MedicationRecord:
    return MedicationRecord(
        item_code=code,
        item_description="Paracetamol syrup",
        tax_code=Decimal("0.00"),
        price=Decimal(price),
        pack_size="100 ml",
    )


class _FlakyStore(InMemoryMedicationStore):
    def __init__(self, failing_code: str) -> None:
        super().__init__()
        self.failing_code = failing_code

    def insert(self, record: MedicationRecord) -> None:
        if record.item_code == self.failing_code:
            raise StoreError("connection reset")
        super().insert(record)


def _document(tmp_path: Path) -> Path:
    path = tmp_path / "price_list.pdf"
    path.write_bytes(b"%PDF-1.4\n")
    return path


def test_insert_missing_only_is_idempotent(price_list_lines: list[str]) -> None:
    records = extract_price_list(price_list_lines)
    store = InMemoryMedicationStore()

    first = apply_write_policy(records, store, "insert_missing")
    after_first = copy.deepcopy(store.rows)
    second = apply_write_policy(records, store, "insert_missing")

    assert first.inserted == len(records)
    assert second.inserted == 0
    assert second.skipped == len(records)
    assert store.rows == after_first


def test_insert_missing_only_leaves_existing_rows_alone() -> None:
    store = InMemoryMedicationStore()
    store.upsert_by_code(_record("SAI007", "10.0"))

    counts = apply_write_policy([_record("SAI007", "12.0")], store, "insert_missing")

    assert counts.skipped == 1
    assert store.get("SAI007")["currentPrice"] == "10.0"


def test_update_overwrites_existing_code() -> None:
    store = InMemoryMedicationStore()
    store.upsert_by_code(_record("SAI007", "10.0"))

    counts = apply_write_policy([_record("SAI007", "12.0")], store, "update")

    assert counts.updated == 1
    assert counts.inserted == 0
    assert len(store) == 1
    row = store.get("SAI007")
    assert row is not None
    assert row["currentPrice"] == "12.0"
    assert row["originalPrice"] == "12.0"


def test_update_is_idempotent(price_list_lines: list[str]) -> None:
    records = extract_price_list(price_list_lines)
    store = InMemoryMedicationStore()

    first = apply_write_policy(records, store, "update")
    after_first = copy.deepcopy(store.rows)
    second = apply_write_policy(records, store, "update")

    assert first.inserted == len(records)
    assert second.updated == len(records)
    assert store.rows == after_first


def test_store_failure_is_counted_and_run_continues() -> None:
    store = _FlakyStore(failing_code="BBB2")
    records = [_record("AAA1", "1.00"), _record("BBB2", "2.00"), _record("CCC3", "3.00")]

    counts = apply_write_policy(records, store, "insert_missing")

    assert counts.inserted == 2
    assert counts.errors == 1
    assert sorted(store.rows) == ["AAA1", "CCC3"]


def test_unknown_policy_is_rejected() -> None:
    with pytest.raises(ValueError):
        apply_write_policy([], InMemoryMedicationStore(), "replace")  # type: ignore[arg-type]


def test_run_import_missing_document(tmp_path: Path) -> None:
    result = run_price_list_import(
        PriceListImportRequest(document_path=tmp_path / "missing.pdf"),
        InMemoryMedicationStore(),
        read_lines=lambda _path: [],
        settings=DEFAULT_SETTINGS,
    )

    assert result.status == "file_not_found"
    assert result.error is not None


def test_run_import_writes_records(tmp_path: Path, price_list_lines: list[str]) -> None:
    store = InMemoryMedicationStore()

    result = run_price_list_import(
        PriceListImportRequest(document_path=_document(tmp_path), policy="update"),
        store,
        read_lines=lambda _path: price_list_lines,
        settings=DEFAULT_SETTINGS,
    )

    assert result.status == "imported"
    assert result.counts is not None
    assert result.counts.inserted == 5
    assert set(store.rows) == {"GSKP0013", "MCLB063", "XYZ100", "ABC123", "DEF456"}


def test_run_import_dry_run_needs_no_store(tmp_path: Path, price_list_lines: list[str]) -> None:
    result = run_price_list_import(
        PriceListImportRequest(document_path=_document(tmp_path), dry_run=True, limit=2),
        read_lines=lambda _path: price_list_lines,
        settings=DEFAULT_SETTINGS,
    )

    assert result.status == "dry_run"
    assert result.counts is None
    assert [r.item_code for r in result.records] == ["GSKP0013", "MCLB063"]


def test_run_import_limit_caps_writes(tmp_path: Path, price_list_lines: list[str]) -> None:
    store = InMemoryMedicationStore()

    result = run_price_list_import(
        PriceListImportRequest(document_path=_document(tmp_path), limit=3),
        store,
        read_lines=lambda _path: price_list_lines,
        settings=DEFAULT_SETTINGS,
    )

    assert result.counts is not None
    assert result.counts.inserted == 3
    assert len(store) == 3


def test_run_import_filter_and_diagnostics(tmp_path: Path, price_list_lines: list[str]) -> None:
    found = run_price_list_import(
        PriceListImportRequest(document_path=_document(tmp_path), dry_run=True, filter_pattern="olmat"),
        read_lines=lambda _path: price_list_lines,
        settings=DEFAULT_SETTINGS,
    )
    assert [r.item_code for r in found.filtered] == ["MCLB063"]
    assert found.diagnostics == []

    missing = run_price_list_import(
        PriceListImportRequest(document_path=_document(tmp_path), dry_run=True, filter_pattern="Capsules"),
        read_lines=lambda _path: ["XYZ100 Amoxicillin", "Capsules"],
        settings=DEFAULT_SETTINGS,
    )
    assert missing.filtered == []
    assert [(d.line_number, d.line, d.record) for d in missing.diagnostics] == [(2, "Capsules", None)]


def test_run_import_invalid_filter(tmp_path: Path) -> None:
    result = run_price_list_import(
        PriceListImportRequest(document_path=_document(tmp_path), dry_run=True, filter_pattern="("),
        read_lines=lambda _path: [],
        settings=DEFAULT_SETTINGS,
    )

    assert result.status == "invalid_filter"


def test_run_import_extraction_failure(tmp_path: Path) -> None:
    def _broken(_path: Path) -> list[str]:
        raise TextExtractionError("no text layer")

    result = run_price_list_import(
        PriceListImportRequest(document_path=_document(tmp_path)),
        InMemoryMedicationStore(),
        read_lines=_broken,
        settings=DEFAULT_SETTINGS,
    )

    assert result.status == "extraction_failed"
    assert result.error == "no text layer"


def test_run_import_requires_store_for_writes(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        run_price_list_import(
            PriceListImportRequest(document_path=_document(tmp_path)),
            read_lines=lambda _path: [],
            settings=DEFAULT_SETTINGS,
        )


def test_run_import_filter_searches_past_the_limit(tmp_path: Path, price_list_lines: list[str]) -> None:
    result = run_price_list_import(
        PriceListImportRequest(
            document_path=_document(tmp_path),
            dry_run=True,
            limit=1,
            filter_pattern="ibuprofen",
        ),
        read_lines=lambda _path: price_list_lines,
        settings=DEFAULT_SETTINGS,
    )

    assert [r.item_code for r in result.filtered] == ["DEF456"]
    assert result.diagnostics == []
    assert [r.item_code for r in result.records] == ["GSKP0013"]
    assert result.parsed_count == 5
