"""Provider-neutral repository records."""

from dataclasses import dataclass, field

OWNER_USER = "User"
OWNER_ORGANIZATION = "Organization"


@dataclass(frozen=True)
class RawRepo:
    """Repository record as reported by a platform, before filtering.

    Attributes:
        name: Repository name (path segment, not the display name).
        https_url: HTTPS clone URL.
        ssh_url: SSH clone URL.
        full_name: Owner-qualified name, used for log messages.
        archived: Whether the platform marks the repository archived.
        fork: Whether the repository is a fork.
        topics: Topics/tags attached to the repository.
        default_branch: Platform default branch, None when unreported.
        has_wiki: Whether the repository has a wiki enabled.
        owner_type: "User" or "Organization", None when unknown.
    """

    name: str
    https_url: str
    ssh_url: str
    full_name: str = ""
    archived: bool = False
    fork: bool = False
    topics: tuple[str, ...] = field(default_factory=tuple)
    default_branch: str | None = None
    has_wiki: bool = False
    owner_type: str | None = None


@dataclass(frozen=True)
class Repo:
    """Normalized clone target handed to the clone process."""

    name: str
    url: str
    clone_url: str
    clone_branch: str
    is_wiki: bool = False
