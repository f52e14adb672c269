"""
Fetch-and-aggregate run over the marketplace `packages/` directory.

listing -> worker pool (manifest + commit dates + icon + README per package)
-> aggregate. A rate limit anywhere stops the run; whatever was resolved
before it is still returned.
"""

import asyncio
import sys
from dataclasses import dataclass, field
from typing import List, Optional

from .aggregate import aggregate
from .client import MarketplaceClient
from .commits import resolve_commit_dates
from .config import CONCURRENCY
from .errors import RateLimitedError
from .manifest import resolve_icon_url, resolve_manifest, resolve_readme_url, validate_manifest
from .models import PackageListing, PluginRecord
from .worker import StopReason, run_pool


@dataclass
class CatalogRun:
    records: List[PluginRecord] = field(default_factory=list)
    listed: int = 0
    stop_reason: Optional[StopReason] = None

    @property
    def rate_limited(self) -> bool:
        return self.stop_reason is StopReason.RATE_LIMITED


async def fetch_package_list(client: MarketplaceClient, verbose: bool = False) -> List[PackageListing]:
    url = client.endpoints.packages_url
    if verbose:
        print(f"Fetching package list from GitHub repo: {url}")

    data, err = await client.get_json(url)
    if err:
        print(f"Failed to fetch package list: {err}", file=sys.stderr)
        return []
    if not isinstance(data, list):
        print(f"Unexpected package listing payload from {url}", file=sys.stderr)
        return []

    packages = [PackageListing.from_api(entry) for entry in data if isinstance(entry, dict)]
    if verbose:
        print(f"Found {len(packages)} packages.")
    return packages


async def retrieve_package_data(client: MarketplaceClient, listing: PackageListing,
                                verbose: bool = False) -> Optional[PluginRecord]:
    """Build the record for one listing entry; None for anything but a directory."""
    if not listing.is_dir:
        return None
    name = listing.name
    if verbose:
        print(f"Processing package: {name}")

    manifest, dates = await asyncio.gather(
        resolve_manifest(client, name, verbose),
        resolve_commit_dates(client, name, verbose),
        return_exceptions=True,
    )
    failures = [o for o in (manifest, dates) if isinstance(o, BaseException)]
    for failure in failures:
        if isinstance(failure, RateLimitedError):
            raise failure
    if failures:
        raise failures[0]

    if manifest is None:
        return PluginRecord.missing_manifest(name, dates)

    errors = validate_manifest(manifest)
    icon_url = resolve_icon_url(client.endpoints, name, manifest)
    readme_url = await resolve_readme_url(client, manifest.get("repo"))
    if not readme_url:
        errors.append("Missing README")

    return PluginRecord.from_manifest(
        name, manifest, icon_url=icon_url, readme_url=readme_url, dates=dates,
        error=", ".join(errors),
    )


async def collect_catalog(client: MarketplaceClient, max_items: Optional[int] = None,
                          verbose: bool = False, concurrency: int = CONCURRENCY) -> CatalogRun:
    try:
        packages = await fetch_package_list(client, verbose)
    except RateLimitedError as e:
        print(f"Rate limited while listing packages: {e}", file=sys.stderr)
        return CatalogRun(stop_reason=StopReason.RATE_LIMITED)

    async def process(listing: PackageListing) -> Optional[PluginRecord]:
        return await retrieve_package_data(client, listing, verbose)

    pool = await run_pool(packages, process, concurrency=concurrency, max_items=max_items)
    if pool.rate_limited:
        print("Processing stopped due to rate limit.", file=sys.stderr)

    return CatalogRun(records=aggregate(pool.results), listed=len(packages), stop_reason=pool.stop_reason)
