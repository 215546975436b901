"""Filter chain for coordinating repository filters."""

import logging
from collections import defaultdict
from collections.abc import Iterable

from repo_roundup.config import FilterConfig
from repo_roundup.scm.models import RawRepo

from .archive import ArchiveFilter
from .base import BaseFilter, FilterResult
from .fork import ForkFilter
from .name_pattern import NamePatternFilter
from .topics import TopicsFilter

logger = logging.getLogger(__name__)


class FilterChain:
    """Composable filter chain for repository discovery.

    A repository must pass every enabled filter. Rejections are counted per
    filter for reporting.
    """

    def __init__(self, config: FilterConfig) -> None:
        """Initialize filter chain from filter config.

        Args:
            config: Filter policy.
        """
        self.config = config
        self.stats: dict[str, int] = defaultdict(int)

        self.filters: list[BaseFilter] = [
            ArchiveFilter(),
            ForkFilter(),
            TopicsFilter(),
            NamePatternFilter(),
        ]

    def evaluate(self, repo: RawRepo) -> FilterResult:
        """Evaluate all enabled filters for a repository.

        Short-circuits on first failure.

        Args:
            repo: Raw repository record.

        Returns:
            FilterResult with pass/fail and rejection reason.
        """
        for filter_obj in self.filters:
            if not filter_obj.is_enabled(self.config):
                continue

            result = filter_obj.evaluate(repo, self.config)
            if not result.passed:
                return result

        return FilterResult(passed=True, filter_name="none")

    def apply(self, repos: Iterable[RawRepo]) -> list[RawRepo]:
        """Keep the repositories that pass every enabled filter.

        Args:
            repos: Raw repository records.

        Returns:
            Passing records in their original order.
        """
        passed = []
        for repo in repos:
            result = self.evaluate(repo)
            if result.passed:
                passed.append(repo)
                continue

            self.record_rejection(result.filter_name)
            logger.debug(
                "Rejected %s: %s - %s",
                repo.full_name or repo.name,
                result.filter_name,
                result.reason or "no reason",
            )
        return passed

    def record_rejection(self, filter_name: str) -> None:
        """Record a filter rejection for statistics.

        Args:
            filter_name: Name of the filter that rejected the repo.
        """
        self.stats[filter_name] += 1

    def get_stats(self) -> dict[str, int]:
        """Get filter rejection statistics.

        Returns:
            Dictionary mapping filter names to rejection counts.
        """
        return dict(self.stats)
