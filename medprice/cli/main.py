#!/usr/bin/env python3

import argparse
import logging
from collections.abc import Sequence


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Medication price-list importer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  import [--pdf PATH] [--insert|--update]
                             Parse a price-list PDF and write it to the store

Examples:
  medprice import --dry-run --limit 50
  medprice import --dry-run --filter "Olmat|SMBA09"
  medprice import --update --store-url http://localhost:8000/api
""",
    )

    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug detail to stderr")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    import_parser = subparsers.add_parser("import", help="Import a medication price list")
    import_parser.add_argument("--pdf", "--path", dest="pdf", help="Price-list PDF (default: price_list.pdf)")
    mode = import_parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--insert",
        "--insert-missing-only",
        dest="update",
        action="store_false",
        help="Insert only missing item codes (default)",
    )
    mode.add_argument("--update", dest="update", action="store_true", help="Upsert every item code")
    import_parser.set_defaults(update=False)
    import_parser.add_argument("--dry-run", "--dry", action="store_true", help="Parse and preview without writes")
    import_parser.add_argument("--limit", type=int, default=0, help="Only preview/import the first N records")
    import_parser.add_argument("--filter", "-f", default="", help="Preview rows whose code/description match")
    store_group = import_parser.add_mutually_exclusive_group()
    store_group.add_argument("--store", help="JSON store file (default: data/medications.json)")
    store_group.add_argument("--store-url", help="Catalog service base URL")

    args = parser.parse_args(argv)

    if args.verbose:
        from medprice.runtime import set_log_level

        set_log_level(logging.DEBUG)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "import":
        from medprice.cli.price_list import cmd_import

        return cmd_import(args)

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
