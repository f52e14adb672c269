#!/usr/bin/env python3
"""
Fetch Logseq marketplace plugin details and regenerate the catalog page in one pass.

Usage:
    python scripts/update_catalog_index.py [--max N] [--verbose|-v] [--output-dir DIR]

Output: <DIR>/index.html and <DIR>/results.json
"""

import argparse
import asyncio
import os
import sys
from typing import List, Optional

from plugin_catalog.cli import add_fetch_arguments, fetch_catalog
from plugin_catalog.config import HTML_FILE, RESULTS_FILE
from plugin_catalog.render import write_html
from plugin_catalog.storage import save_records


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Update the Logseq marketplace catalog page")
    add_fetch_arguments(parser)
    parser.add_argument("--output-dir", default=".", help="Directory for index.html and results.json")
    return parser.parse_args(argv)


async def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    run = await fetch_catalog(max_items=args.max_items, verbose=args.verbose)

    html_path = os.path.join(args.output_dir, HTML_FILE)
    results_path = os.path.join(args.output_dir, RESULTS_FILE)
    count = write_html(run.records, html_path)
    print(f"\nFetched {count} plugins. Output: {html_path}")
    save_records(run.records, results_path)
    print(f"Package Details saved to {results_path}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
