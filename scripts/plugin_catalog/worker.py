"""
Bounded worker pool over a list of packages.

CONCURRENCY coroutines share one cursor into the list. The cursor is read and
bumped with no await in between, so on a single event loop no index is ever
claimed twice. Each result lands at its item's index, so the output keeps the
input order whatever order the work finishes in.
"""

import asyncio
import enum
import sys
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List, Optional, Sequence

from .config import CONCURRENCY, PROGRESS_EVERY
from .errors import RateLimitedError
from .models import PluginRecord


class StopReason(enum.Enum):
    RATE_LIMITED = "rate-limited"
    MAX_ITEMS = "max-items"


@dataclass
class PoolResult:
    results: List[Any]
    stop_reason: Optional[StopReason] = None
    processed: int = 0

    @property
    def stopped_early(self) -> bool:
        return self.stop_reason is not None

    @property
    def rate_limited(self) -> bool:
        return self.stop_reason is StopReason.RATE_LIMITED


def failed_record(item: Any, exc: Exception) -> PluginRecord:
    return PluginRecord.failed(getattr(item, "name", str(item)), str(exc))


async def run_pool(
    items: Sequence[Any],
    process: Callable[[Any], Awaitable[Any]],
    concurrency: int = CONCURRENCY,
    max_items: Optional[int] = None,
    on_error: Optional[Callable[[Any, Exception], Any]] = None,
) -> PoolResult:
    """
    Run `process` over `items` with at most `concurrency` calls in flight.

    A RateLimitedError from `process` stops every worker at its next claim;
    calls already in flight are left to finish. Any other exception is turned
    into `on_error(item, exc)` at that position and the run goes on.
    """
    if concurrency < 1:
        raise ValueError("concurrency must be at least 1")
    on_error = on_error or failed_record

    limit = len(items) if max_items is None else min(len(items), max_items)
    results: List[Any] = [None] * limit
    cursor = 0
    processed = 0
    rate_limited = False

    async def worker():
        nonlocal cursor, processed, rate_limited
        while not rate_limited and cursor < limit:
            idx = cursor
            cursor += 1
            item = items[idx]
            try:
                results[idx] = await process(item)
            except RateLimitedError as e:
                if not rate_limited:
                    print(f"Rate limit reached at {getattr(item, 'name', idx)}: {e}", file=sys.stderr)
                    print("Stopping all workers.", file=sys.stderr)
                rate_limited = True
                return
            except Exception as e:
                print(f"Error processing package {getattr(item, 'name', idx)}: {e}", file=sys.stderr)
                results[idx] = on_error(item, e)

            processed += 1
            if processed % PROGRESS_EVERY == 0:
                print(f"  Processed {processed} packages")

    await asyncio.gather(*[worker() for _ in range(min(concurrency, max(limit, 1)))])

    if rate_limited:
        stop_reason = StopReason.RATE_LIMITED
    elif limit < len(items):
        print(f"  Processed {processed} packages. Stopping early (--max {max_items}).")
        stop_reason = StopReason.MAX_ITEMS
    else:
        stop_reason = None
    return PoolResult(results=results, stop_reason=stop_reason, processed=processed)
