"""Pytest configuration for the catalog scripts.

Adds the scripts directory to the Python path and serves a fake GitHub (API
and raw content) from an in-process aiohttp server.
"""

from __future__ import annotations

import asyncio
import dataclasses
import importlib.util
import json
import sys
import typing as typ
from pathlib import Path

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

_SCRIPTS_DIR = Path(__file__).resolve().parents[1]
if str(_SCRIPTS_DIR) not in sys.path:
    sys.path.insert(0, str(_SCRIPTS_DIR))

from plugin_catalog.client import MarketplaceClient  # noqa: E402
from plugin_catalog.config import Endpoints  # noqa: E402

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from types import ModuleType


def load_script(name: str) -> ModuleType:
    """Load one of the top-level scripts in `scripts/` as a module."""
    script_path = _SCRIPTS_DIR / f"{name}.py"
    spec = importlib.util.spec_from_file_location(f"{name}_script", script_path)
    if spec is None or spec.loader is None:
        msg = f"Could not load script from {script_path}"
        raise ImportError(msg)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def commit(date: str) -> dict[str, typ.Any]:
    """Build a commit entry shaped like the GitHub commits API."""
    return {"sha": date, "commit": {"committer": {"date": date}}}


@dataclasses.dataclass
class FakeGitHub:
    """Mutable fake of the marketplace repository and raw content host."""

    listing: list[dict[str, str]] = dataclasses.field(default_factory=list)
    manifests: dict[str, typ.Any] = dataclasses.field(default_factory=dict)
    commits: dict[str, typ.Any] = dataclasses.field(default_factory=dict)
    readmes: set[tuple[str, str]] = dataclasses.field(default_factory=set)
    rate_limited: set[str] = dataclasses.field(default_factory=set)
    statuses: dict[str, int] = dataclasses.field(default_factory=dict)
    slow_paths: dict[str, float] = dataclasses.field(default_factory=dict)
    requests: list[str] = dataclasses.field(default_factory=list)
    request_headers: list[dict[str, str]] = dataclasses.field(default_factory=list)
    base_url: str = ""

    def endpoints(self) -> Endpoints:
        return Endpoints(
            packages_url=f"{self.base_url}/api/contents/packages",
            commits_url=f"{self.base_url}/api/commits",
            rate_limit_url=f"{self.base_url}/api/rate_limit",
            raw_packages_url=f"{self.base_url}/raw/packages",
            raw_content_url=f"{self.base_url}/readme",
        )

    def add_package(
        self,
        name: str,
        manifest: typ.Any = None,
        dates: list[str] | None = None,
        readme_branch: str | None = "main",
    ) -> None:
        self.listing.append({"name": name, "type": "dir"})
        if manifest is not None:
            self.manifests[name] = manifest
            repo = manifest.get("repo") if isinstance(manifest, dict) else None
            if repo and readme_branch:
                self.readmes.add((repo, readme_branch))
        if dates is not None:
            self.commits[name] = [commit(d) for d in dates]

    def app(self) -> web.Application:
        @web.middleware
        async def record(request: web.Request, handler: typ.Any) -> web.StreamResponse:
            self.requests.append(request.path_qs)
            self.request_headers.append(dict(request.headers))
            if request.path in self.slow_paths:
                await asyncio.sleep(self.slow_paths[request.path])
            if request.path in self.rate_limited:
                return web.json_response(
                    {"message": "API rate limit exceeded"},
                    status=403,
                    headers={"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": "1700000000"},
                )
            if request.path in self.statuses:
                return web.Response(status=self.statuses[request.path], text="forced status")
            return await handler(request)

        async def listing(_: web.Request) -> web.Response:
            return web.json_response(self.listing)

        async def rate_limit(_: web.Request) -> web.Response:
            return web.json_response(
                {"resources": {"core": {"remaining": 4999, "limit": 5000}}},
                headers={"X-RateLimit-Remaining": "4999"},
            )

        async def commits(request: web.Request) -> web.Response:
            path = request.query.get("path", "")
            name = path.removeprefix("packages/")
            if name not in self.commits:
                return web.json_response([])
            return web.json_response(self.commits[name])

        async def manifest(request: web.Request) -> web.Response:
            name = request.match_info["name"]
            if name not in self.manifests:
                return web.Response(status=404, text="404: Not Found")
            body = self.manifests[name]
            if isinstance(body, bytes):
                return web.Response(body=body, content_type="text/plain", charset="utf-8")
            text = body if isinstance(body, str) else json.dumps(body)
            # raw.githubusercontent.com serves JSON as text/plain
            return web.Response(text=text, content_type="text/plain")

        async def readme(request: web.Request) -> web.Response:
            info = request.match_info
            repo = f"{info['owner']}/{info['repo']}"
            if (repo, info["branch"]) in self.readmes:
                return web.Response(text=f"# {repo}\n")
            return web.Response(status=404, text="404: Not Found")

        app = web.Application(middlewares=[record])
        app.router.add_get("/api/contents/packages", listing)
        app.router.add_get("/api/rate_limit", rate_limit)
        app.router.add_get("/api/commits", commits)
        app.router.add_get("/raw/packages/{name}/manifest.json", manifest)
        app.router.add_get("/readme/{owner}/{repo}/{branch}/README.md", readme)
        return app


@pytest_asyncio.fixture
async def fake_github() -> cabc.AsyncIterator[FakeGitHub]:
    """Start the fake GitHub server and yield its state."""
    fake = FakeGitHub()
    server = TestServer(fake.app())
    await server.start_server()
    fake.base_url = str(server.make_url("/")).rstrip("/")
    try:
        yield fake
    finally:
        await server.close()


@pytest_asyncio.fixture
async def client(fake_github: FakeGitHub) -> cabc.AsyncIterator[MarketplaceClient]:
    """Client bound to the fake server with a test token."""
    async with MarketplaceClient(endpoints=fake_github.endpoints(), token="test-token") as c:
        yield c


@pytest.fixture
def no_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
