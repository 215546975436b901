"""Registry mapping provider kinds to adapter classes."""

import logging

from repo_roundup.config import ProviderConfig
from repo_roundup.scm.base import ScmClient
from repo_roundup.scm.bitbucket import BitbucketClient
from repo_roundup.scm.errors import UnknownProviderKind
from repo_roundup.scm.gitea import GiteaClient
from repo_roundup.scm.github import GitHubClient
from repo_roundup.scm.gitlab import GitLabClient

logger = logging.getLogger(__name__)

BUILTIN_CLIENTS: tuple[type[ScmClient], ...] = (
    GitHubClient,
    GitLabClient,
    BitbucketClient,
    GiteaClient,
)


class ClientRegistry:
    """Provider kinds available to a run.

    Built once at startup and passed to whatever selects a client. Kinds are
    matched case-insensitively. Registering a kind twice replaces the earlier
    class (last registration wins).
    """

    def __init__(self) -> None:
        self._clients: dict[str, type[ScmClient]] = {}

    def register(self, client_cls: type[ScmClient]) -> None:
        """Register an adapter class under its ``kind``.

        Args:
            client_cls: ScmClient subclass with a non-empty ``kind``.

        Raises:
            ValueError: If the class declares no kind.
        """
        if not client_cls.kind:
            msg = f"{client_cls.__name__} does not declare a provider kind"
            raise ValueError(msg)

        key = client_cls.kind.lower()
        previous = self._clients.get(key)
        if previous is not None and previous is not client_cls:
            logger.warning(
                "Replacing %s provider %s with %s",
                key,
                previous.__name__,
                client_cls.__name__,
            )
        self._clients[key] = client_cls

    def construct_client(self, kind: str, config: ProviderConfig) -> ScmClient:
        """Build a client for a provider kind.

        Args:
            kind: Provider kind, e.g. "github".
            config: Provider configuration passed to the adapter.

        Returns:
            Ready-to-use client.

        Raises:
            UnknownProviderKind: If no adapter is registered for the kind.
            AuthConfigurationError: If the token is missing or malformed.
            EndpointConfigurationError: If the base URL cannot be parsed.
        """
        client_cls = self._clients.get(kind.lower())
        if client_cls is None:
            raise UnknownProviderKind(kind)
        return client_cls.new_client(config)

    def kinds(self) -> list[str]:
        """Get the registered provider kinds, sorted."""
        return sorted(self._clients)

    def __contains__(self, kind: object) -> bool:
        return isinstance(kind, str) and kind.lower() in self._clients


def default_registry() -> ClientRegistry:
    """Create a registry holding the built-in providers."""
    registry = ClientRegistry()
    for client_cls in BUILTIN_CLIENTS:
        registry.register(client_cls)
    return registry
