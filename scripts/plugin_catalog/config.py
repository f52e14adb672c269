"""
Configuration for the Logseq marketplace catalog scripts.

Everything is a module-level constant except the GitHub token, which is read
from the environment each time a client is built.
"""

import os
from dataclasses import dataclass
from typing import Dict, Optional

# ─── Upstream locations ───────────────────────────────────────────────────────

GITHUB_API = "https://api.github.com"
MARKETPLACE_REPO = "logseq/marketplace"
MARKETPLACE_BRANCH = "master"
PACKAGES_DIR = "packages"

PACKAGES_URL = f"{GITHUB_API}/repos/{MARKETPLACE_REPO}/contents/{PACKAGES_DIR}"
COMMITS_URL = f"{GITHUB_API}/repos/{MARKETPLACE_REPO}/commits"
RATE_LIMIT_URL = f"{GITHUB_API}/rate_limit"
RAW_CONTENT_URL = "https://raw.githubusercontent.com"
RAW_PACKAGES_URL = f"{RAW_CONTENT_URL}/{MARKETPLACE_REPO}/{MARKETPLACE_BRANCH}/{PACKAGES_DIR}"

# Only these two branches are probed for a README, in this order.
README_BRANCHES = ("main", "master")

# ─── Concurrency knobs ────────────────────────────────────────────────────────

CONCURRENCY = 10                    # workers pulling packages from the listing
COMMITS_PER_PAGE = 100              # single page of commit history per package
REQUEST_TIMEOUT = 20                # seconds, total per request
PROGRESS_EVERY = 25                 # print a progress line every N packages
RATE_LIMIT_STATUSES = (403, 429)

# ─── Output ───────────────────────────────────────────────────────────────────

DATA_FILE = "plugins-data.json"
RESULTS_FILE = "results.json"
HTML_FILE = "index.html"
PAGE_TITLE = "Logseq Marketplace Plugins"

PUBLISHED_CATALOG_URL = (
    "https://raw.githubusercontent.com/rudifa/marketplace/refs/heads/"
    "add-package-catalog-generation-3/catalog/index.html"
)

ACCEPT_HEADER = "application/vnd.github.v3+json"


def github_token() -> Optional[str]:
    token = os.environ.get("GITHUB_TOKEN", "").strip()
    return token or None


def github_headers(token: Optional[str] = None) -> Dict[str, str]:
    """Headers for GitHub requests, with a bearer token when one is set."""
    headers = {"Accept": ACCEPT_HEADER}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


@dataclass(frozen=True)
class Endpoints:
    """URL templates for every upstream resource the pipeline reads."""

    packages_url: str = PACKAGES_URL
    commits_url: str = COMMITS_URL
    rate_limit_url: str = RATE_LIMIT_URL
    raw_packages_url: str = RAW_PACKAGES_URL
    raw_content_url: str = RAW_CONTENT_URL

    def manifest_url(self, package_name: str) -> str:
        return f"{self.raw_packages_url}/{package_name}/manifest.json"

    def asset_url(self, package_name: str, path: str) -> str:
        return f"{self.raw_packages_url}/{package_name}/{path}"

    def readme_url(self, repo: str, branch: str) -> str:
        return f"{self.raw_content_url}/{repo}/{branch}/README.md"

    def commits_params(self, package_name: str) -> Dict[str, str]:
        return {"path": f"{PACKAGES_DIR}/{package_name}", "per_page": str(COMMITS_PER_PAGE)}
