"""Fetch errors raised or returned by the marketplace client."""

from typing import Optional


class FetchError(RuntimeError):
    """A single upstream resource could not be read."""

    def __init__(self, message: str, *, url: str = "", status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class NotFoundError(FetchError):
    """Non-2xx response other than a rate limit. The resource counts as absent."""

    @classmethod
    def http_status(cls, url: str, status_code: int) -> "NotFoundError":
        return cls(f"HTTP {status_code} for {url}", url=url, status_code=status_code)


class TransportError(FetchError):
    """Network failure or timeout before a response arrived."""

    @classmethod
    def from_exception(cls, url: str, exc: BaseException) -> "TransportError":
        reason = str(exc) or type(exc).__name__
        return cls(f"Request to {url} failed: {reason}", url=url)


class MalformedResponseError(FetchError):
    """Body could not be decoded as text or JSON."""

    @classmethod
    def invalid_json(cls, url: str, exc: ValueError) -> "MalformedResponseError":
        return cls(f"Invalid JSON from {url}: {exc}", url=url)

    @classmethod
    def invalid_encoding(cls, url: str, exc: UnicodeDecodeError) -> "MalformedResponseError":
        return cls(f"Undecodable body from {url}: {exc.reason} at byte {exc.start}", url=url)


class RateLimitedError(FetchError):
    """HTTP 403/429. Fatal for the whole run."""

    def __init__(self, message: str, *, url: str = "", status_code: Optional[int] = None,
                 reset_at: Optional[float] = None):
        self.reset_at = reset_at
        super().__init__(message, url=url, status_code=status_code)

    @classmethod
    def http_status(cls, url: str, status_code: int,
                    reset_at: Optional[float] = None) -> "RateLimitedError":
        return cls(
            f"Rate limited or too many requests. Status: {status_code} ({url})",
            url=url,
            status_code=status_code,
            reset_at=reset_at,
        )
