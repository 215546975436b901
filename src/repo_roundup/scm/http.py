"""Async HTTP handle shared by the SCM provider adapters.

Thin wrapper around httpx.AsyncClient that authenticates every request,
parses JSON bodies and turns transport failures into UpstreamAPIError.
It never retries: a failed request surfaces immediately to the caller.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Optional

import httpx
from pydantic import BaseModel

from repo_roundup import __version__
from repo_roundup.scm.errors import EndpointConfigurationError, UpstreamAPIError

logger = logging.getLogger(__name__)


class RateLimitInfo(BaseModel):
    """Rate limit information from response headers."""

    limit: int
    remaining: int
    reset: datetime
    used: int
    resource: str = "core"

    @classmethod
    def from_headers(cls, headers: httpx.Headers) -> Optional["RateLimitInfo"]:
        """Extract rate limit info from response headers.

        GitHub and Gitea both report ``x-ratelimit-*`` headers.

        Args:
            headers: HTTP response headers.

        Returns:
            RateLimitInfo if headers present, None otherwise.
        """
        if "x-ratelimit-limit" not in headers:
            return None

        reset_timestamp = int(headers.get("x-ratelimit-reset", "0"))
        reset_dt = datetime.fromtimestamp(reset_timestamp, tz=UTC)

        return cls(
            limit=int(headers.get("x-ratelimit-limit", "0")),
            remaining=int(headers.get("x-ratelimit-remaining", "0")),
            reset=reset_dt,
            used=int(headers.get("x-ratelimit-used", "0")),
            resource=headers.get("x-ratelimit-resource", "core"),
        )


@dataclass
class ScmResponse:
    """API response with parsed data and metadata."""

    status_code: int
    data: Any
    headers: httpx.Headers
    url: str = ""
    rate_limit: RateLimitInfo | None = None

    @property
    def is_success(self) -> bool:
        """Check if response was successful (2xx status code)."""
        return 200 <= self.status_code < 300

    @property
    def is_rate_limited(self) -> bool:
        """Check if response indicates rate limiting (429 or 403 with rate limit)."""
        return self.status_code == 429 or (
            self.status_code == 403
            and self.rate_limit is not None
            and self.rate_limit.remaining == 0
        )

    def raise_for_status(self) -> None:
        """Raise UpstreamAPIError unless the response is a success.

        Raises:
            UpstreamAPIError: For any non-2xx status code.
        """
        if self.is_success:
            return

        if self.is_rate_limited:
            reset = self.rate_limit.reset.isoformat() if self.rate_limit else "unknown"
            msg = f"Rate limit exceeded for {self.url} (resets at {reset})"
        else:
            detail = self.data.get("message") if isinstance(self.data, dict) else None
            msg = f"API error {self.status_code} for {self.url}"
            if detail:
                msg = f"{msg}: {detail}"

        raise UpstreamAPIError(msg, status_code=self.status_code)


def parse_base_url(base_url: str) -> httpx.URL:
    """Parse a self-hosted base URL override.

    Args:
        base_url: Absolute http(s) URL of the instance.

    Returns:
        Parsed URL.

    Raises:
        EndpointConfigurationError: If the URL is not an absolute http(s) URL.
    """
    try:
        url = httpx.URL(base_url.strip())
    except (httpx.InvalidURL, TypeError) as e:
        msg = f"Cannot parse base URL {base_url!r}: {e}"
        raise EndpointConfigurationError(msg) from e

    if url.scheme not in ("http", "https") or not url.host:
        msg = f"Base URL must be an absolute http(s) URL, got {base_url!r}"
        raise EndpointConfigurationError(msg)

    return url


class ScmHttpClient:
    """Async HTTP client bound to one API root."""

    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        base_url: str,
        headers: dict[str, str] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize HTTP client.

        Args:
            base_url: API root; request paths are resolved below it.
            headers: Extra headers (authentication, Accept) for every request.
            timeout: Request timeout in seconds.
        """
        self._base_url = base_url
        self._headers = {"User-Agent": f"repo-roundup/{__version__}", **(headers or {})}
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        """API root this client sends requests to."""
        return self._base_url

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                headers=self._headers,
                follow_redirects=True,
            )
        return self._client

    async def get(self, path: str, params: dict[str, Any] | None = None) -> ScmResponse:
        """Make a GET request.

        Args:
            path: API path relative to the base URL.
            params: Query parameters.

        Returns:
            ScmResponse with parsed data. Non-2xx responses are returned,
            not raised; call ``raise_for_status`` to enforce success.

        Raises:
            UpstreamAPIError: On timeout or network failure.
        """
        client = self._ensure_client()

        logger.debug("GET %s %s", path, params or {})

        try:
            response = await client.get(path, params=params)
        except httpx.HTTPError as e:
            msg = f"Request failed for GET {path}: {e}"
            raise UpstreamAPIError(msg) from e

        data = None
        if response.content:
            try:
                data = response.json()
            except ValueError as e:
                logger.warning("Failed to parse JSON response from %s: %s", path, e)
                data = response.text

        return ScmResponse(
            status_code=response.status_code,
            data=data,
            headers=response.headers,
            url=str(response.url),
            rate_limit=RateLimitInfo.from_headers(response.headers),
        )

    async def close(self) -> None:
        """Close the HTTP client and cleanup resources."""
        if self._client:
            await self._client.aclose()
            self._client = None
