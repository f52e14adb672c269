"""Argument parsing and run reporting shared by the scripts in `scripts/`."""

import argparse
import sys
import time
from typing import Optional

from .client import MarketplaceClient
from .config import Endpoints
from .errors import RateLimitedError
from .pipeline import CatalogRun, collect_catalog
from .worker import StopReason


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    return number


def add_fetch_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--max", dest="max_items", type=positive_int, default=None,
                        help="Limit the number of packages processed")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")


async def print_rate_limit(client: MarketplaceClient) -> None:
    if not client.authenticated:
        print("⚠️  GITHUB_TOKEN not set - API rate limits will be lower", file=sys.stderr)
    try:
        data, _ = await client.rate_limit_status()
    except RateLimitedError:
        print("WARNING: GitHub API rate limit already exhausted.", file=sys.stderr)
        return
    if data:
        core = data.get("resources", {}).get("core", {})
        print(f"GitHub API: {core.get('remaining', 0)}/{core.get('limit', 0)} requests remaining\n")


async def fetch_catalog(max_items: Optional[int] = None, verbose: bool = False,
                        endpoints: Optional[Endpoints] = None) -> CatalogRun:
    """Run the pipeline with a fresh client and print a summary."""
    start = time.time()
    print(f"{'='*60}")
    print("LOGSEQ MARKETPLACE — fetching package details")
    print(f"{'='*60}")

    async with MarketplaceClient(endpoints=endpoints) as client:
        await print_rate_limit(client)
        run = await collect_catalog(client, max_items=max_items, verbose=verbose)

        elapsed = time.time() - start
        print(f"\n{'='*60}")
        print(f"✓ Fetched {len(run.records)} plugins from {run.listed} listed packages in {elapsed:.0f}s")
        print(f"  Total API requests: {client.request_count}")
        if run.stop_reason is StopReason.RATE_LIMITED:
            print("✗ Stopped early: GitHub rate limit. Output is incomplete.", file=sys.stderr)
        elif run.stop_reason is StopReason.MAX_ITEMS:
            print(f"  Stopped early: --max {max_items}")
        print(f"{'='*60}")
    return run
