"""Fetch, aggregate and render the Logseq marketplace plugin catalog."""

from .aggregate import aggregate
from .client import MarketplaceClient
from .models import CommitDates, PackageListing, PluginRecord
from .pipeline import CatalogRun, collect_catalog
from .worker import PoolResult, StopReason, run_pool

__all__ = [
    "CatalogRun",
    "CommitDates",
    "MarketplaceClient",
    "PackageListing",
    "PluginRecord",
    "PoolResult",
    "StopReason",
    "aggregate",
    "collect_catalog",
    "run_pool",
]
