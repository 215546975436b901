"""Repository discovery for organizations and users.

Enumerates repositories through an SCM client, applies the filter chain and
normalizes the survivors into clone targets.
"""

import logging

from repo_roundup.config import Config
from repo_roundup.discovery.filters import FilterChain
from repo_roundup.discovery.normalize import normalize_repos
from repo_roundup.scm.base import ScmClient
from repo_roundup.scm.models import Repo

logger = logging.getLogger(__name__)


async def discover_repos(config: Config, client: ScmClient) -> list[Repo]:
    """Discover clone targets for the configured organization or user.

    Args:
        config: Application configuration.
        client: SCM client for the configured provider.

    Returns:
        Ordered clone targets.

    Raises:
        UpstreamAPIError: If enumeration fails; nothing is returned.
        MalformedUpstreamURL: If a platform clone URL is unusable.
    """
    target = config.target

    logger.info(
        "Starting repository discovery: provider=%s, mode=%s, target=%s",
        client.get_type(),
        target.mode,
        target.name,
    )

    if target.mode == "org":
        raw_repos = await client.get_org_repos(target.name)
    else:
        raw_repos = await client.get_user_repos(target.name)

    logger.info("Fetched %d raw repositories from %s", len(raw_repos), target.name)

    filter_chain = FilterChain(config.filters)
    filtered = filter_chain.apply(raw_repos)

    logger.info(
        "Filtered to %d repositories (rejected: %d)",
        len(filtered),
        len(raw_repos) - len(filtered),
    )
    for filter_name, count in sorted(
        filter_chain.get_stats().items(), key=lambda x: x[1], reverse=True
    ):
        logger.info("  %s: %d", filter_name, count)

    repos = normalize_repos(filtered, config.clone, client.clone_credentials())

    logger.info("Repository discovery complete: %d clone targets", len(repos))

    return repos
