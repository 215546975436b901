"""Clone target normalizer.

Converts filtered raw records into Repo clone targets: resolves the branch,
builds the clone URL for the configured protocol and derives wiki targets.
"""

import logging
import re
from collections.abc import Iterable

from repo_roundup.config import CloneConfig
from repo_roundup.scm.errors import MalformedUpstreamURL
from repo_roundup.scm.models import RawRepo, Repo

logger = logging.getLogger(__name__)

FALLBACK_BRANCH = "master"
WIKI_BRANCH = "master"

SCHEME_PATTERN = re.compile(r"^(https://)(.+)$")


def add_token_to_https_url(url: str, credentials: str) -> str:
    """Splice credentials into an HTTPS URL as userinfo.

    Args:
        url: Clone URL starting with ``https://``.
        credentials: Userinfo to insert, e.g. a token.

    Returns:
        ``https://<credentials>@<rest of url>``.

    Raises:
        MalformedUpstreamURL: If the URL does not start with ``https://``.
    """
    match = SCHEME_PATTERN.match(url)
    if not match:
        raise MalformedUpstreamURL(url, "missing https:// scheme prefix")
    scheme, rest = match.groups()
    return f"{scheme}{credentials}@{rest}"


def wiki_url(url: str) -> str:
    """Derive a wiki repository URL from its parent's URL.

    Replaces a trailing ``.git`` with ``.wiki.git``; URLs without the suffix
    get ``.wiki.git`` appended.
    """
    base = url.removesuffix(".git")
    return f"{base}.wiki.git"


def resolve_branch(repo: RawRepo, clone: CloneConfig) -> str:
    """Pick the branch to check out: override, platform default, then "master"."""
    if clone.branch:
        return clone.branch
    return repo.default_branch or FALLBACK_BRANCH


def normalize_repo(repo: RawRepo, clone: CloneConfig, credentials: str) -> list[Repo]:
    """Convert one raw record into its clone targets.

    Args:
        repo: Raw record that passed filtering.
        clone: Clone protocol, branch override and wiki policy.
        credentials: Userinfo for HTTPS clone URLs.

    Returns:
        The repository target, followed by its wiki target when wiki
        cloning is enabled and the repository has a wiki.

    Raises:
        MalformedUpstreamURL: If the platform URL for the protocol is unusable.
    """
    if clone.protocol == "https":
        if not repo.https_url:
            raise MalformedUpstreamURL(repo.https_url, f"{repo.name} has no HTTPS clone URL")
        url = repo.https_url
        clone_url = add_token_to_https_url(url, credentials)
    else:
        if not repo.ssh_url:
            raise MalformedUpstreamURL(repo.ssh_url, f"{repo.name} has no SSH clone URL")
        url = clone_url = repo.ssh_url

    target = Repo(
        name=repo.name,
        url=url,
        clone_url=clone_url,
        clone_branch=resolve_branch(repo, clone),
    )
    targets = [target]

    if clone.wiki and repo.has_wiki:
        targets.append(
            Repo(
                name="",
                url=wiki_url(target.url),
                clone_url=wiki_url(target.clone_url),
                clone_branch=WIKI_BRANCH,
                is_wiki=True,
            )
        )

    return targets


def normalize_repos(
    repos: Iterable[RawRepo],
    clone: CloneConfig,
    credentials: str,
) -> list[Repo]:
    """Normalize raw records in order, each followed by its wiki target.

    Args:
        repos: Raw records that passed filtering.
        clone: Clone protocol, branch override and wiki policy.
        credentials: Userinfo for HTTPS clone URLs.

    Returns:
        Ordered clone targets.
    """
    targets: list[Repo] = []
    for repo in repos:
        targets.extend(normalize_repo(repo, clone, credentials))

    logger.debug("Normalized %d clone targets", len(targets))
    return targets
