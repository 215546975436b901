"""SCM provider adapters and the repository contracts they produce."""

from repo_roundup.scm.auth import TokenAuth
from repo_roundup.scm.base import ScmClient
from repo_roundup.scm.bitbucket import BitbucketClient
from repo_roundup.scm.errors import (
    AuthConfigurationError,
    EndpointConfigurationError,
    MalformedUpstreamURL,
    ScmError,
    UnknownProviderKind,
    UpstreamAPIError,
)
from repo_roundup.scm.gitea import GiteaClient
from repo_roundup.scm.github import GitHubClient
from repo_roundup.scm.gitlab import GitLabClient
from repo_roundup.scm.http import RateLimitInfo, ScmHttpClient, ScmResponse
from repo_roundup.scm.models import RawRepo, Repo
from repo_roundup.scm.registry import ClientRegistry, default_registry

__all__ = [
    "AuthConfigurationError",
    "BitbucketClient",
    "ClientRegistry",
    "EndpointConfigurationError",
    "GitHubClient",
    "GitLabClient",
    "GiteaClient",
    "MalformedUpstreamURL",
    "RateLimitInfo",
    "RawRepo",
    "Repo",
    "ScmClient",
    "ScmError",
    "ScmHttpClient",
    "ScmResponse",
    "TokenAuth",
    "UnknownProviderKind",
    "UpstreamAPIError",
    "default_registry",
]
