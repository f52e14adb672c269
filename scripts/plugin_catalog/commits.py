"""Creation and last-update dates from the commit history of a package directory."""

from typing import Any, Dict

from .client import MarketplaceClient
from .models import CommitDates


def _committer_date(commit: Any) -> str:
    if not isinstance(commit, dict):
        return ""
    return ((commit.get("commit") or {}).get("committer") or {}).get("date") or ""


async def resolve_commit_dates(client: MarketplaceClient, package_name: str,
                               verbose: bool = False) -> CommitDates:
    """
    First and last commit dates touching `packages/<name>`.

    GitHub lists commits newest first, so element 0 is the last update and the
    final element the creation. Only the first page is read: for a package
    with more than one page of history, `created_at` is the oldest commit on
    that page rather than the true first commit.
    """
    endpoints = client.endpoints
    params: Dict[str, str] = endpoints.commits_params(package_name)
    if verbose:
        print(f"  Fetching commit dates for {package_name}: {endpoints.commits_url} {params}")

    commits, err = await client.get_json(endpoints.commits_url, params=params)
    if err or not isinstance(commits, list) or not commits:
        return CommitDates()

    return CommitDates(
        created_at=_committer_date(commits[-1]),
        last_updated=_committer_date(commits[0]),
    )
