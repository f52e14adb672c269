"""Drop empty result slots and order records newest first."""

from typing import Iterable, List, Optional

from .models import PluginRecord


def aggregate(results: Iterable[Optional[PluginRecord]]) -> List[PluginRecord]:
    """
    Drop empty slots and sort by last update, newest first.

    ISO 8601 timestamps from GitHub are fixed width, so string order is time
    order. Records without a date go last and keep their relative order.
    """
    records = [r for r in results if r is not None]
    dated = [r for r in records if r.last_updated]
    undated = [r for r in records if not r.last_updated]
    # sort() stays stable with reverse=True
    dated.sort(key=lambda r: r.last_updated, reverse=True)
    return dated + undated
