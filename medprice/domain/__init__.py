"""Core domain models for medprice.

- MedicationRecord: one parsed price-list row
- ImportCounts: write outcome counters for an import run
- WritePolicy: insert-missing-only or update

Usage:
    from medprice.domain import MedicationRecord
"""

from medprice.domain.medication import ImportCounts, MedicationRecord, WritePolicy

__all__ = [
    "ImportCounts",
    "MedicationRecord",
    "WritePolicy",
]
