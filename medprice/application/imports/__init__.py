"""Price-list import workflows."""

from medprice.application.imports.price_list import (
    PriceListImportRequest,
    PriceListImportResult,
    apply_write_policy,
    run_price_list_import,
)

__all__ = [
    "PriceListImportRequest",
    "PriceListImportResult",
    "apply_write_policy",
    "run_price_list_import",
]
