"""Filtering and normalization of discovered repositories."""

from repo_roundup.discovery.discover import discover_repos
from repo_roundup.discovery.filters import FilterChain
from repo_roundup.discovery.normalize import (
    add_token_to_https_url,
    normalize_repo,
    normalize_repos,
    resolve_branch,
    wiki_url,
)

__all__ = [
    "FilterChain",
    "add_token_to_https_url",
    "discover_repos",
    "normalize_repo",
    "normalize_repos",
    "resolve_branch",
    "wiki_url",
]
