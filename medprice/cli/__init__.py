"""Unified command-line interface for medprice.

Usage:
    medprice import [--pdf PATH] [--insert|--update] [--dry-run]
    medprice import --limit 50 --filter "SMBA09"
"""
