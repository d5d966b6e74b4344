"""Medication price-list extraction and catalog import."""

__version__ = "0.1.0"
