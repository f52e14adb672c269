#!/usr/bin/env python3
"""
Render plugins-data.json as a sortable HTML table.

Usage:
    python scripts/generate_plugins_table.py [--input PATH] [--output PATH] [--title TEXT] [-v]
"""

import argparse
import sys
from typing import List, Optional

from plugin_catalog.config import DATA_FILE, HTML_FILE, PAGE_TITLE
from plugin_catalog.render import write_html
from plugin_catalog.storage import load_records


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate the Logseq marketplace plugins table")
    parser.add_argument("--input", "-i", default=DATA_FILE, help=f"Plugin records JSON (default: {DATA_FILE})")
    parser.add_argument("--output", "-o", default=HTML_FILE, help=f"Output HTML file (default: {HTML_FILE})")
    parser.add_argument("--title", default=PAGE_TITLE, help="Page title")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        records = load_records(args.input)
    except (OSError, ValueError) as e:
        # json.JSONDecodeError is a ValueError
        print(f"ERROR: could not read {args.input}: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        print(f"Loaded {len(records)} records from {args.input}")
    count = write_html(records, args.output, title=args.title)
    print(f"Found {count} packages. Output: {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
