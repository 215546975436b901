"""Base filter interface for repository filtering."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from repo_roundup.config import FilterConfig
from repo_roundup.scm.models import RawRepo


@dataclass
class FilterResult:
    """Result of a filter evaluation.

    Attributes:
        passed: Whether the repository passed the filter.
        reason: Optional reason for rejection (None if passed).
        filter_name: Name of the filter that produced this result.
    """

    passed: bool
    reason: str | None = None
    filter_name: str = ""


class BaseFilter(ABC):
    """Abstract base class for repository filters.

    Filters are pure: they read the record and the filter policy and never
    modify either.
    """

    name: str = "base"

    @abstractmethod
    def is_enabled(self, config: FilterConfig) -> bool:
        """Check if this filter is enabled in the configuration.

        Args:
            config: Filter policy.

        Returns:
            True if the filter should be applied.
        """

    @abstractmethod
    def evaluate(self, repo: RawRepo, config: FilterConfig) -> FilterResult:
        """Evaluate a repository against this filter.

        Args:
            repo: Raw repository record.
            config: Filter policy.

        Returns:
            FilterResult indicating pass/fail with optional reason.
        """
