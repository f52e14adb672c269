#!/usr/bin/env python3
"""
Fetch Logseq marketplace plugin details from GitHub.

Usage:
    python scripts/fetch_plugins_data.py [--max N] [--verbose|-v] [--output PATH]

Writes the aggregated plugin records, newest update first, as a JSON array
(default: plugins-data.json). Set GITHUB_TOKEN for higher rate limits.
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from plugin_catalog.cli import add_fetch_arguments, fetch_catalog
from plugin_catalog.config import DATA_FILE
from plugin_catalog.storage import save_records


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch Logseq marketplace plugin package details")
    add_fetch_arguments(parser)
    parser.add_argument("--output", "-o", default=DATA_FILE, help=f"Output JSON file (default: {DATA_FILE})")
    return parser.parse_args(argv)


async def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    run = await fetch_catalog(max_items=args.max_items, verbose=args.verbose)

    count = save_records(run.records, args.output)
    print(f"✓ Saved {count} package details → {args.output}")
    if args.verbose:
        print("Script execution completed.")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
