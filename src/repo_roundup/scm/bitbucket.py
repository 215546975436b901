"""Bitbucket Cloud adapter.

Organizations map to Bitbucket workspaces. Bitbucket reports neither archived
state nor topics, so those filters never reject its repositories.
"""

import re
from typing import Any

from repo_roundup.scm.auth import TokenAuth
from repo_roundup.scm.base import ScmClient, page_from_url
from repo_roundup.scm.errors import UpstreamAPIError
from repo_roundup.scm.http import ScmResponse
from repo_roundup.scm.models import OWNER_ORGANIZATION, OWNER_USER, RawRepo

OWNER_TYPES = {"user": OWNER_USER, "team": OWNER_ORGANIZATION}

USERINFO_PATTERN = re.compile(r"^(https?://)[^@/]+@")


def _clone_link(item: dict[str, Any], name: str) -> str:
    for link in item["links"]["clone"]:
        if link.get("name") == name:
            return link["href"]
    raise KeyError(f"links.clone[{name}]")


class BitbucketClient(ScmClient):
    """Enumerates repositories through the Bitbucket Cloud 2.0 API."""

    kind = "bitbucket"
    DEFAULT_API_URL = "https://api.bitbucket.org/2.0"
    MAX_PAGE_SIZE = 100
    LOGIN_FIELD = "username"

    @classmethod
    def build_auth(cls, token: str | None) -> TokenAuth:
        return TokenAuth(token, scheme="Bearer", provider=cls.kind)

    def clone_credentials(self) -> str:
        return f"x-token-auth:{self._auth.token}"

    def org_repos_request(self, org: str) -> tuple[str, dict[str, Any]]:
        return f"/repositories/{org}", {}

    def user_repos_request(self, user: str) -> tuple[str, dict[str, Any]]:
        return f"/repositories/{user}", {}

    def self_repos_request(self) -> tuple[str, dict[str, Any]]:
        return "/repositories", {"role": "member"}

    def page_params(self, page: int) -> dict[str, Any]:
        return {"page": page, "pagelen": self.page_size}

    def page_items(self, response: ScmResponse) -> list[Any]:
        data = response.data
        if not isinstance(data, dict) or not isinstance(data.get("values"), list):
            msg = f"Expected paged 'values' response from {response.url}"
            raise UpstreamAPIError(msg, status_code=response.status_code)
        return data["values"]

    def next_page(self, response: ScmResponse) -> int | None:
        return page_from_url(response.data.get("next"))

    def to_raw_repo(self, item: dict[str, Any]) -> RawRepo:
        owner = item.get("owner") or {}
        mainbranch = item.get("mainbranch") or {}
        # Bitbucket embeds the caller's username in HTTPS clone links
        https_url = USERINFO_PATTERN.sub(r"\1", _clone_link(item, "https"))
        return RawRepo(
            name=item["slug"],
            full_name=item.get("full_name") or item["slug"],
            https_url=https_url,
            ssh_url=_clone_link(item, "ssh"),
            fork="parent" in item,
            default_branch=mainbranch.get("name") or None,
            has_wiki=bool(item.get("has_wiki", False)),
            owner_type=OWNER_TYPES.get(owner.get("type", "")),
        )
