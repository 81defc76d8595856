"""Command-line interface for sheetfeed."""

import argparse
import logging
import sys

from .config import settings
from .exceptions import SheetFeedError


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="sheetfeed - read and update Google Spreadsheets through the XML feeds"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("auth", help="Authenticate with Google and save a token")

    worksheets_parser = subparsers.add_parser("worksheets", help="List a spreadsheet's worksheets")
    worksheets_parser.add_argument("spreadsheet", help="Spreadsheet key")

    cells_parser = subparsers.add_parser("cells", help="Print every cell of a worksheet")
    cells_parser.add_argument("spreadsheet", help="Spreadsheet key")
    cells_parser.add_argument("worksheet", help="Worksheet id, e.g. od6")
    cells_parser.add_argument(
        "--column-title", help="Only print the column whose header cell has this value"
    )

    get_parser = subparsers.add_parser("get-cell", help="Print a single cell")
    set_parser = subparsers.add_parser("set-cell", help="Update a single cell")
    for sub in (get_parser, set_parser):
        sub.add_argument("spreadsheet", help="Spreadsheet key")
        sub.add_argument("worksheet", help="Worksheet id, e.g. od6")
        sub.add_argument("row", type=int, help="1-based row")
        sub.add_argument("col", type=int, help="1-based column")
    set_parser.add_argument("value", help="New input value")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "auth":
        run_auth()
        return

    try:
        run_command(args)
    except SheetFeedError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def run_command(args):
    """Run one of the feed commands against an authorised client."""
    from .feed import FeedClient

    with FeedClient.from_settings() as client:
        spreadsheet = client.spreadsheet(args.spreadsheet)

        if args.command == "worksheets":
            listing = spreadsheet.get()
            print(listing.title)
            for summary in listing.worksheets:
                print(f"  {summary.title}\t{summary.row_count}x{summary.col_count}\t{summary.id}")
            return

        worksheet = spreadsheet.worksheet(args.worksheet)

        if args.command == "cells":
            sheet = worksheet.get()
            cells = sheet.cells
            if args.column_title is not None:
                col = sheet.column_by_title(args.column_title)
                if col is None:
                    print(f"No column titled {args.column_title!r}", file=sys.stderr)
                    sys.exit(1)
                cells = tuple(cell for cell in cells if cell.col == col)
            for cell in cells:
                print(f"R{cell.row}C{cell.col}\t{cell.input_value}")
        elif args.command == "get-cell":
            cell = worksheet.cell(args.row, args.col).get()
            print(cell.input_value)
        elif args.command == "set-cell":
            result = worksheet.cell(args.row, args.col).set(args.value)
            if not result.success:
                for error in result.errors:
                    print(f"Error: {error}", file=sys.stderr)
                sys.exit(1)
            print(f"Updated {result.updated_cells} cell(s)")


def run_auth():
    """Run the Google authentication flow."""
    from .auth import load_credentials

    print("Authenticating with Google...")
    try:
        load_credentials(settings)
        print("Authentication successful!")
        print("Token saved. You can now use sheetfeed.")
    except Exception as e:
        print(f"Authentication failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
