"""GitLab.com and self-managed GitLab adapter.

Organizations map to GitLab groups, including their subgroups.
"""

from typing import Any
from urllib.parse import quote

from repo_roundup.scm.auth import TokenAuth
from repo_roundup.scm.base import ScmClient
from repo_roundup.scm.errors import UpstreamAPIError
from repo_roundup.scm.http import ScmResponse, parse_base_url
from repo_roundup.scm.models import OWNER_ORGANIZATION, OWNER_USER, RawRepo

NAMESPACE_KINDS = {"user": OWNER_USER, "group": OWNER_ORGANIZATION}


class GitLabClient(ScmClient):
    """Enumerates projects through the GitLab REST API v4."""

    kind = "gitlab"
    DEFAULT_API_URL = "https://gitlab.com/api/v4"
    MAX_PAGE_SIZE = 100
    LOGIN_FIELD = "username"

    @classmethod
    def build_auth(cls, token: str | None) -> TokenAuth:
        return TokenAuth(token, header="PRIVATE-TOKEN", scheme=None, provider=cls.kind)

    @classmethod
    def endpoints(cls, base_url: str | None) -> tuple[str, str]:
        if not base_url:
            return cls.DEFAULT_API_URL, cls.DEFAULT_API_URL

        url = str(parse_base_url(base_url)).rstrip("/")
        if not url.endswith("/api/v4"):
            url += "/api/v4"
        return url, url

    def clone_credentials(self) -> str:
        return f"oauth2:{self._auth.token}"

    def org_repos_request(self, org: str) -> tuple[str, dict[str, Any]]:
        return f"/groups/{quote(org, safe='')}/projects", {"include_subgroups": "true"}

    def user_repos_request(self, user: str) -> tuple[str, dict[str, Any]]:
        return f"/users/{quote(user, safe='')}/projects", {}

    def self_repos_request(self) -> tuple[str, dict[str, Any]]:
        return "/projects", {"membership": "true"}

    def next_page(self, response: ScmResponse) -> int | None:
        # X-Next-Page is empty on the last page
        value = response.headers.get("x-next-page", "").strip()
        if not value:
            return None
        try:
            return int(value)
        except ValueError as e:
            msg = f"Non-numeric X-Next-Page header {value!r} from {response.url}"
            raise UpstreamAPIError(msg, status_code=response.status_code) from e

    def to_raw_repo(self, item: dict[str, Any]) -> RawRepo:
        namespace = item.get("namespace") or {}
        topics = item.get("topics")
        if topics is None:
            topics = item.get("tag_list") or ()
        return RawRepo(
            name=item["path"],
            full_name=item.get("path_with_namespace") or item["path"],
            https_url=item["http_url_to_repo"],
            ssh_url=item["ssh_url_to_repo"],
            archived=bool(item.get("archived", False)),
            fork="forked_from_project" in item,
            topics=tuple(topics),
            default_branch=item.get("default_branch") or None,
            has_wiki=bool(item.get("wiki_enabled", False)),
            owner_type=NAMESPACE_KINDS.get(namespace.get("kind", "")),
        )
