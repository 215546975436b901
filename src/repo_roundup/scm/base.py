"""Base interface for SCM provider adapters.

An adapter owns an authenticated ScmHttpClient and its page size, and exposes
repository enumeration for organizations and users. Subclasses describe their
platform's endpoints, pagination signal and record layout; the page loop
itself lives here so every provider paginates the same way.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Self
from urllib.parse import parse_qs, urlparse

from repo_roundup.config import ProviderConfig
from repo_roundup.scm.auth import TokenAuth
from repo_roundup.scm.errors import UpstreamAPIError
from repo_roundup.scm.http import ScmHttpClient, ScmResponse, parse_base_url
from repo_roundup.scm.models import OWNER_USER, RawRepo

logger = logging.getLogger(__name__)

LINK_PATTERN = re.compile(r'<([^>]+)>;\s*rel="([^"]+)"')


def parse_link_header(link_header: str | None) -> dict[str, str]:
    """Parse Link header to extract pagination URLs.

    Args:
        link_header: Link header value from response.

    Returns:
        Dict mapping rel type to URL (e.g., {"next": "url", "last": "url"}).
    """
    if not link_header:
        return {}

    links = {}
    # Link header format: <url>; rel="next", <url>; rel="last"
    for part in link_header.split(","):
        match = LINK_PATTERN.match(part.strip())
        if match:
            url, rel = match.groups()
            links[rel] = url

    return links


def page_from_url(url: str | None, param: str = "page") -> int | None:
    """Extract the page cursor from a next-page URL.

    Args:
        url: Absolute URL of the next page.
        param: Query parameter carrying the page number.

    Returns:
        Page number, or None if the URL is empty or has no page parameter.

    Raises:
        UpstreamAPIError: If the page parameter is not a number.
    """
    if not url:
        return None
    values = parse_qs(urlparse(url).query).get(param)
    if not values:
        return None
    try:
        return int(values[0])
    except ValueError as e:
        msg = f"Non-numeric {param} cursor in next-page URL {url}"
        raise UpstreamAPIError(msg) from e


class ScmClient(ABC):
    """Repository enumeration for one SCM platform."""

    kind: ClassVar[str] = ""
    DEFAULT_API_URL: ClassVar[str] = ""
    MAX_PAGE_SIZE: ClassVar[int] = 100
    PROGRESS_INTERVAL: ClassVar[int] = 12
    LOGIN_FIELD: ClassVar[str] = "login"

    def __init__(
        self,
        http: ScmHttpClient,
        auth: TokenAuth,
        page_size: int = MAX_PAGE_SIZE,
        upload_url: str | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            http: Authenticated HTTP client rooted at the API URL.
            auth: Validated token, reused for clone credentials.
            page_size: Records per page, capped at MAX_PAGE_SIZE.
            upload_url: Upload endpoint, when the platform has one.
        """
        self._http = http
        self._auth = auth
        self.page_size = max(1, min(page_size, self.MAX_PAGE_SIZE))
        self.api_url = http.base_url
        self.upload_url = upload_url or http.base_url
        self._login: str | None = None

    @classmethod
    def new_client(cls, config: ProviderConfig) -> Self:
        """Build an authenticated client from provider configuration.

        Args:
            config: Provider configuration.

        Returns:
            Ready-to-use client.

        Raises:
            AuthConfigurationError: If the token is missing or malformed.
            EndpointConfigurationError: If the base URL cannot be parsed.
        """
        auth = cls.build_auth(config.resolve_token())
        api_url, upload_url = cls.endpoints(config.base_url)
        headers = {**cls.default_headers(), **auth.get_authorization_header()}
        http = ScmHttpClient(api_url, headers=headers, timeout=config.timeout)

        logger.debug("Created %s client for %s", cls.kind, api_url)

        return cls(http, auth, page_size=config.page_size, upload_url=upload_url)

    @classmethod
    def build_auth(cls, token: str | None) -> TokenAuth:
        """Validate the token for this platform."""
        return TokenAuth(token, provider=cls.kind)

    @classmethod
    def endpoints(cls, base_url: str | None) -> tuple[str, str]:
        """Resolve API and upload endpoints.

        Args:
            base_url: Self-hosted instance URL, or None for the public service.

        Returns:
            Tuple of (api_url, upload_url).

        Raises:
            EndpointConfigurationError: If the base URL cannot be parsed.
        """
        if not base_url:
            return cls.DEFAULT_API_URL, cls.DEFAULT_API_URL
        url = str(parse_base_url(base_url)).rstrip("/")
        return url, url

    @classmethod
    def default_headers(cls) -> dict[str, str]:
        """Headers sent with every request besides authentication."""
        return {"Accept": "application/json"}

    def get_type(self) -> str:
        """Get the provider kind used by the registry."""
        return self.kind

    def clone_credentials(self) -> str:
        """Userinfo spliced into HTTPS clone URLs."""
        return self._auth.token

    async def get_org_repos(self, org: str) -> list[RawRepo]:
        """Fetch every repository belonging to an organization.

        Args:
            org: Organization (group, workspace) name.

        Returns:
            Raw records in platform order.

        Raises:
            UpstreamAPIError: If any page request fails.
        """
        logger.info("Fetching repositories for %s org: %s", self.kind, org)
        path, params = self.org_repos_request(org)
        return await self._collect(path, params, notify_progress=True)

    async def get_user_repos(self, user: str) -> list[RawRepo]:
        """Fetch repositories owned by a user.

        When ``user`` is the authenticated account, the self endpoint is used
        so private repositories are included. That endpoint also lists
        repositories of organizations the user belongs to; only records owned
        by a user account are kept. If the authenticated account cannot be
        looked up, ``user`` is treated as another user.

        Args:
            user: User login.

        Returns:
            Raw records in platform order.

        Raises:
            UpstreamAPIError: If any page request fails.
        """
        try:
            login = await self.get_authenticated_login()
        except UpstreamAPIError as e:
            # Installation and deploy tokens may not read the current user
            logger.debug(
                "Authenticated user lookup failed, treating %s as another user: %s", user, e
            )
            login = None

        if login and user.casefold() == login.casefold():
            logger.info(
                "Cloning all your public/private repos. This process may take a bit "
                "longer than other clones, please be patient..."
            )
            path, params = self.self_repos_request()
            records = await self._collect(path, params)
            return [record for record in records if record.owner_type == OWNER_USER]

        logger.info("Fetching repositories for %s user: %s", self.kind, user)
        path, params = self.user_repos_request(user)
        return await self._collect(path, params)

    async def get_authenticated_login(self) -> str | None:
        """Get the login of the token's owner.

        Returns:
            Login name, cached after the first lookup.

        Raises:
            UpstreamAPIError: If the lookup fails.
        """
        if self._login is None:
            response = await self._http.get(self.current_user_path())
            response.raise_for_status()
            if isinstance(response.data, dict):
                self._login = response.data.get(self.LOGIN_FIELD)
        return self._login

    def current_user_path(self) -> str:
        """Path of the authenticated-user endpoint."""
        return "/user"

    @abstractmethod
    def org_repos_request(self, org: str) -> tuple[str, dict[str, Any]]:
        """Path and query parameters listing an organization's repositories."""

    @abstractmethod
    def user_repos_request(self, user: str) -> tuple[str, dict[str, Any]]:
        """Path and query parameters listing another user's repositories."""

    @abstractmethod
    def self_repos_request(self) -> tuple[str, dict[str, Any]]:
        """Path and query parameters listing the authenticated user's repositories."""

    @abstractmethod
    def to_raw_repo(self, item: dict[str, Any]) -> RawRepo:
        """Convert one platform record into a RawRepo.

        Raises:
            KeyError: If a required field is missing.
        """

    def page_params(self, page: int) -> dict[str, Any]:
        """Query parameters selecting one page."""
        return {"page": page, "per_page": self.page_size}

    def page_items(self, response: ScmResponse) -> list[Any]:
        """Extract the records of one page."""
        if not isinstance(response.data, list):
            msg = f"Expected list response from {response.url}, got {type(response.data).__name__}"
            raise UpstreamAPIError(msg, status_code=response.status_code)
        return response.data

    def next_page(self, response: ScmResponse) -> int | None:
        """Page cursor of the next page, or None on the last page."""
        links = parse_link_header(response.headers.get("link"))
        return page_from_url(links.get("next"))

    async def _collect(
        self,
        path: str,
        params: dict[str, Any],
        *,
        notify_progress: bool = False,
    ) -> list[RawRepo]:
        """Request pages until the platform reports no next page.

        Records are kept in platform order without deduplication. Any
        failure discards what was fetched so far.
        """
        records: list[RawRepo] = []
        page = 1

        while True:
            response = await self._http.get(path, params={**params, **self.page_params(page)})
            response.raise_for_status()

            items = self.page_items(response)
            records.extend(self._convert(item, response) for item in items)

            logger.debug("Fetched %d repos on page %d (total: %d)", len(items), page, len(records))

            next_page = self.next_page(response)
            if next_page is None:
                break

            if notify_progress and page % self.PROGRESS_INTERVAL == 0:
                logger.info("Everything is okay, the org just has a lot of repos...")

            page = next_page

        return records

    def _convert(self, item: Any, response: ScmResponse) -> RawRepo:
        if not isinstance(item, dict):
            msg = f"Unexpected repository record in {response.url}: {item!r}"
            raise UpstreamAPIError(msg, status_code=response.status_code)
        try:
            return self.to_raw_repo(item)
        except (KeyError, TypeError) as e:
            msg = f"Repository record from {response.url} is missing field {e}"
            raise UpstreamAPIError(msg, status_code=response.status_code) from e

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._http.close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()
