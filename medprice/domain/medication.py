"""Data models for medication price-list imports."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Literal

# insert_missing: never touch existing codes. update: upsert every code.
WritePolicy = Literal["insert_missing", "update"]


@dataclass(frozen=True)
class MedicationRecord:
    """A single priced medication row recovered from a supplier price list."""

    item_code: str
    item_description: str
    tax_code: Decimal
    price: Decimal
    pack_size: str | None = None

    def as_row(self) -> dict[str, str | None]:
        """Serializable form keyed the way the catalog stores it."""
        return {
            "itemCode": self.item_code,
            "itemDescription": self.item_description,
            "packSize": self.pack_size,
            "taxCode": str(self.tax_code),
            "price": str(self.price),
        }


@dataclass
class ImportCounts:
    """Per-run write outcome counters."""

    inserted: int = 0
    updated: int = 0
    skipped: int = 0
    errors: int = 0

    @property
    def written(self) -> int:
        return self.inserted + self.updated
