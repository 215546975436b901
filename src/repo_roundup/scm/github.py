"""GitHub and GitHub Enterprise Server adapter."""

import re
from typing import Any, ClassVar

from repo_roundup.scm.auth import TokenAuth
from repo_roundup.scm.base import ScmClient
from repo_roundup.scm.http import parse_base_url
from repo_roundup.scm.models import RawRepo

# ghp_/gho_/ghu_/ghs_/ghr_ tokens, fine-grained PATs, or classic 40-hex tokens
GITHUB_TOKEN_PATTERN = re.compile(
    r"gh[pousr]_[A-Za-z0-9_]{16,}|github_pat_[A-Za-z0-9_]{16,}|[a-f0-9]{40}"
)


class GitHubClient(ScmClient):
    """Enumerates repositories through the GitHub REST API."""

    kind = "github"
    DEFAULT_API_URL = "https://api.github.com"
    MAX_PAGE_SIZE = 100

    ENTERPRISE_API_SUFFIX: ClassVar[str] = "api/v3/"
    ENTERPRISE_UPLOAD_SUFFIX: ClassVar[str] = "api/uploads/"

    @classmethod
    def build_auth(cls, token: str | None) -> TokenAuth:
        return TokenAuth(token, pattern=GITHUB_TOKEN_PATTERN, provider=cls.kind)

    @classmethod
    def endpoints(cls, base_url: str | None) -> tuple[str, str]:
        """Resolve Enterprise Server endpoints.

        The base URL serves both the API (``<base>/api/v3/``) and uploads
        (``<base>/api/uploads/``). A base URL that already ends in either
        suffix is taken as the instance root plus that suffix.
        """
        if not base_url:
            return cls.DEFAULT_API_URL, cls.DEFAULT_API_URL

        root = str(parse_base_url(base_url))
        if not root.endswith("/"):
            root += "/"
        for suffix in (cls.ENTERPRISE_API_SUFFIX, cls.ENTERPRISE_UPLOAD_SUFFIX):
            if root.endswith(suffix):
                root = root[: -len(suffix)]

        return root + cls.ENTERPRISE_API_SUFFIX, root + cls.ENTERPRISE_UPLOAD_SUFFIX

    @classmethod
    def default_headers(cls) -> dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def org_repos_request(self, org: str) -> tuple[str, dict[str, Any]]:
        return f"/orgs/{org}/repos", {"type": "all"}

    def user_repos_request(self, user: str) -> tuple[str, dict[str, Any]]:
        return f"/users/{user}/repos", {"type": "owner"}

    def self_repos_request(self) -> tuple[str, dict[str, Any]]:
        return "/user/repos", {"visibility": "all"}

    def to_raw_repo(self, item: dict[str, Any]) -> RawRepo:
        owner = item.get("owner") or {}
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
            owner_type=owner.get("type"),
        )
