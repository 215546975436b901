"""Gitea (and Forgejo) adapter."""

from typing import Any

from repo_roundup.scm.base import ScmClient
from repo_roundup.scm.http import parse_base_url
from repo_roundup.scm.models import OWNER_ORGANIZATION, OWNER_USER, RawRepo


class GiteaClient(ScmClient):
    """Enumerates repositories through the Gitea API v1.

    Gitea repository owners carry no account type, so an owner is a "User"
    when it is the authenticated account and an "Organization" otherwise.
    """

    kind = "gitea"
    DEFAULT_API_URL = "https://gitea.com/api/v1"
    MAX_PAGE_SIZE = 50

    @classmethod
    def endpoints(cls, base_url: str | None) -> tuple[str, str]:
        if not base_url:
            return cls.DEFAULT_API_URL, cls.DEFAULT_API_URL

        url = str(parse_base_url(base_url)).rstrip("/")
        if not url.endswith("/api/v1"):
            url += "/api/v1"
        return url, url

    def org_repos_request(self, org: str) -> tuple[str, dict[str, Any]]:
        return f"/orgs/{org}/repos", {}

    def user_repos_request(self, user: str) -> tuple[str, dict[str, Any]]:
        return f"/users/{user}/repos", {}

    def self_repos_request(self) -> tuple[str, dict[str, Any]]:
        return "/user/repos", {}

    def page_params(self, page: int) -> dict[str, Any]:
        return {"page": page, "limit": self.page_size}

    def to_raw_repo(self, item: dict[str, Any]) -> RawRepo:
        owner_login = (item.get("owner") or {}).get("login")
        owner_type = None
        if owner_login and self._login:
            owner_type = (
                OWNER_USER if owner_login.casefold() == self._login.casefold() else OWNER_ORGANIZATION
            )
        return RawRepo(
            name=item["name"],
            full_name=item.get("full_name") or item["name"],
            https_url=item["clone_url"],
            ssh_url=item["ssh_url"],
            archived=bool(item.get("archived", False)),
            fork=bool(item.get("fork", False)),
            topics=tuple(item.get("topics") or ()),
            default_branch=item.get("default_branch") or None,
            has_wiki=bool(item.get("has_wiki", False)),
            owner_type=owner_type,
        )
