"""
Async HTTP layer for the marketplace repository on GitHub.

Responses are classified once, here: 2xx is data, 403/429 raises
RateLimitedError, anything else comes back as a (None, FetchError) pair the
caller may ignore. Nothing is retried.
"""

import asyncio
import json
import sys
from typing import Any, Dict, Optional, Tuple

import aiohttp

from .config import (
    RATE_LIMIT_STATUSES,
    REQUEST_TIMEOUT,
    Endpoints,
    github_headers,
    github_token,
)
from .errors import (
    FetchError,
    MalformedResponseError,
    NotFoundError,
    RateLimitedError,
    TransportError,
)


class MarketplaceClient:
    """Async client with rate-limit classification and a per-request timeout."""

    def __init__(self, endpoints: Optional[Endpoints] = None, token: Optional[str] = None,
                 timeout: float = REQUEST_TIMEOUT):
        self.endpoints = endpoints or Endpoints()
        self._headers = github_headers(token if token is not None else github_token())
        self._timeout = timeout
        self._session: Optional[aiohttp.ClientSession] = None
        self.request_count = 0
        self.rate_remaining: Optional[int] = None
        self.rate_reset: Optional[float] = None

    @property
    def authenticated(self) -> bool:
        return "Authorization" in self._headers

    async def __aenter__(self):
        timeout = aiohttp.ClientTimeout(total=self._timeout)
        self._session = aiohttp.ClientSession(timeout=timeout)
        return self

    async def __aexit__(self, *exc):
        if self._session:
            await self._session.close()

    def _update_rate_info(self, headers):
        remaining = headers.get("X-RateLimit-Remaining")
        reset = headers.get("X-RateLimit-Reset")
        if remaining is not None and remaining.isdigit():
            self.rate_remaining = int(remaining)
        if reset is not None and reset.isdigit():
            self.rate_reset = float(reset)

    async def _request(self, url: str, params: Optional[Dict] = None,
                       headers: Optional[Dict[str, str]] = None) -> Tuple[Optional[str], Optional[FetchError]]:
        """GET a body as text, raising on rate limits and returning other failures."""
        try:
            async with self._session.get(url, params=params, headers=headers) as resp:
                self.request_count += 1
                self._update_rate_info(resp.headers)

                if 200 <= resp.status < 300:
                    try:
                        return await resp.text(), None
                    except UnicodeDecodeError as e:
                        err = MalformedResponseError.invalid_encoding(url, e)
                        print(f"  ✗ {err}", file=sys.stderr)
                        return None, err

                try:
                    body = await resp.text()
                except (aiohttp.ClientError, UnicodeDecodeError):
                    body = "(could not read error body)"
                print(f"  ✗ HTTP {resp.status} {resp.reason} for {url}: {body[:200]}", file=sys.stderr)

                if resp.status in RATE_LIMIT_STATUSES:
                    raise RateLimitedError.http_status(url, resp.status, reset_at=self.rate_reset)
                return None, NotFoundError.http_status(url, resp.status)

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            err = TransportError.from_exception(url, e)
            print(f"  ✗ {err}", file=sys.stderr)
            return None, err

    async def get_text(self, url: str) -> Tuple[Optional[str], Optional[FetchError]]:
        return await self._request(url, headers=self._headers)

    async def get_json(self, url: str, params: Optional[Dict] = None) -> Tuple[Optional[Any], Optional[FetchError]]:
        text, err = await self._request(url, params=params, headers=self._headers)
        if err:
            return None, err
        try:
            return json.loads(text), None
        except ValueError as e:
            return None, MalformedResponseError.invalid_json(url, e)

    async def probe(self, url: str) -> bool:
        """True when the URL answers 2xx. No classification, no auth headers."""
        try:
            async with self._session.get(url) as resp:
                self.request_count += 1
                return 200 <= resp.status < 300
        except (aiohttp.ClientError, asyncio.TimeoutError):
            return False

    async def rate_limit_status(self) -> Tuple[Optional[Dict], Optional[FetchError]]:
        return await self.get_json(self.endpoints.rate_limit_url)
