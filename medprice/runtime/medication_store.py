"""Keyed storage backends for imported medication rows.

Every backend is keyed by item code and exposes the same three writes the
import policies need: ``exists``, ``insert`` and ``upsert_by_code``. Each
single-record write is atomic on its own; there is no multi-record transaction.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol

from medprice.domain.medication import MedicationRecord
from medprice.runtime.logging import get_logger

logger = get_logger(__name__)

StoredRow = dict[str, Any]


class StoreError(RuntimeError):
    """Raised when a single-record store operation fails."""


class MedicationStore(Protocol):
    def exists(self, item_code: str) -> bool: ...

    def insert(self, record: MedicationRecord) -> None: ...

    def upsert_by_code(self, record: MedicationRecord) -> None: ...

    def get(self, item_code: str) -> StoredRow | None: ...


def record_to_row(record: MedicationRecord) -> StoredRow:
    """Catalog row for a record; a fresh import sets both price columns."""
    row: StoredRow = record.as_row()
    price = row.pop("price")
    row["originalPrice"] = price
    row["currentPrice"] = price
    return row


class InMemoryMedicationStore:
    """Dict-backed store used for dry runs and tests."""

    def __init__(self, rows: dict[str, StoredRow] | None = None) -> None:
        self.rows: dict[str, StoredRow] = dict(rows or {})

    def exists(self, item_code: str) -> bool:
        return item_code in self.rows

    def insert(self, record: MedicationRecord) -> None:
        if record.item_code in self.rows:
            raise StoreError(f"Item code already exists: {record.item_code}")
        self.rows[record.item_code] = record_to_row(record)

    def upsert_by_code(self, record: MedicationRecord) -> None:
        self.rows[record.item_code] = record_to_row(record)

    def get(self, item_code: str) -> StoredRow | None:
        row = self.rows.get(item_code)
        return dict(row) if row is not None else None

    def __len__(self) -> int:
        return len(self.rows)


class JsonFileMedicationStore(InMemoryMedicationStore):
    """Store persisted as one JSON document keyed by item code.

    The document is rewritten through a temp file and ``os.replace`` after every
    write, so a crash mid-run leaves the last committed record on disk.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(self._load())

    def _load(self) -> dict[str, StoredRow]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise StoreError(f"Cannot read medication store {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise StoreError(f"Medication store {self.path} is not a JSON object")
        return data

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self.rows, f, indent=2, sort_keys=True)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise StoreError(f"Cannot write medication store {self.path}: {exc}") from exc
        logger.debug("Medication store saved to %s (%d rows)", self.path, len(self.rows))

    def _commit(self, item_code: str, previous: StoredRow | None) -> None:
        try:
            self._save()
        except StoreError:
            # Keep memory in step with what is on disk
            if previous is None:
                self.rows.pop(item_code, None)
            else:
                self.rows[item_code] = previous
            raise

    def insert(self, record: MedicationRecord) -> None:
        super().insert(record)
        self._commit(record.item_code, None)

    def upsert_by_code(self, record: MedicationRecord) -> None:
        previous = self.rows.get(record.item_code)
        super().upsert_by_code(record)
        self._commit(record.item_code, previous)
