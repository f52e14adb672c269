#!/usr/bin/env python3
"""
Download a published catalog page and open it in the default browser.

Usage:
    python scripts/dev_open_catalog.py [--url URL] [--output PATH] [--no-open]
"""

import argparse
import os
import sys
import webbrowser
from typing import List, Optional

import requests

from plugin_catalog.config import PUBLISHED_CATALOG_URL, REQUEST_TIMEOUT

DEFAULT_OUTPUT = os.path.join(".idea", "index.html")


def download_catalog(url: str, output: str) -> Optional[str]:
    """Save the page at `url` to `output`; returns an error message on failure."""
    try:
        response = requests.get(url, timeout=REQUEST_TIMEOUT)
    except requests.RequestException as e:
        return str(e)
    if response.status_code != 200:
        return f"API returned {response.status_code}"

    parent = os.path.dirname(output)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(output, "w", encoding="utf-8") as f:
        f.write(response.text)
    return None


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Download and open a published catalog page")
    parser.add_argument("--url", default=PUBLISHED_CATALOG_URL, help="Raw URL of the catalog index.html")
    parser.add_argument("--output", "-o", default=DEFAULT_OUTPUT, help=f"Where to save it (default: {DEFAULT_OUTPUT})")
    parser.add_argument("--no-open", action="store_true", help="Download only")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    error = download_catalog(args.url, args.output)
    if error:
        print(f"❌ Failed to download the catalog: {error}", file=sys.stderr)
        return 1

    print(f"✅ Successfully downloaded the catalog → {args.output}")
    if not args.no_open:
        webbrowser.open("file://" + os.path.abspath(args.output))
    return 0


if __name__ == "__main__":
    sys.exit(main())
