"""
Manifest lookup for one marketplace package.

The README probe only tries the `main` and `master` branches. A plugin
repository with any other default branch is reported as having no README.
"""

from typing import Any, Dict, List, Optional

from .client import MarketplaceClient
from .config import README_BRANCHES, Endpoints

# Checked in this order; the message is reported when the field is empty.
MANIFEST_FIELDS = (
    ("description", "Missing package description"),
    ("author", "Missing package author"),
    ("repo", "Missing package repository"),
    ("icon", "Missing package icon"),
)


async def resolve_manifest(client: MarketplaceClient, package_name: str,
                           verbose: bool = False) -> Optional[Dict[str, Any]]:
    """Fetch `packages/<name>/manifest.json`, or None when absent or not a JSON object."""
    url = client.endpoints.manifest_url(package_name)
    if verbose:
        print(f"  Fetching manifest for {package_name}: {url}")

    data, err = await client.get_json(url)
    if err:
        if verbose:
            print(f"  Error fetching manifest for {package_name}: {err}")
        return None
    if not isinstance(data, dict):
        return None
    return data


def validate_manifest(manifest: Dict[str, Any]) -> List[str]:
    # A missing name is not reported; the directory name stands in for it.
    return [message for field, message in MANIFEST_FIELDS if not manifest.get(field)]


def resolve_icon_url(endpoints: Endpoints, package_name: str, manifest: Optional[Dict[str, Any]]) -> str:
    if manifest and manifest.get("icon"):
        return endpoints.asset_url(package_name, manifest["icon"])
    return ""


async def resolve_readme_url(client: MarketplaceClient, repo: Optional[str]) -> Optional[str]:
    """First README.md URL that answers on `main` then `master`, else None."""
    if not repo:
        return None
    for branch in README_BRANCHES:
        url = client.endpoints.readme_url(repo, branch)
        if await client.probe(url):
            return url
    return None
