"""Name pattern filter for repository discovery."""

import re

from repo_roundup.config import FilterConfig
from repo_roundup.scm.models import RawRepo

from .base import BaseFilter, FilterResult


class NamePatternFilter(BaseFilter):
    """Filter repositories based on name patterns (regex).

    Supports:
    - match_regex: Repository name must match at least one pattern
    - exclude_regex: Repository name must not match any pattern

    Patterns are validated when the configuration is loaded.
    """

    name = "name_pattern"

    def is_enabled(self, config: FilterConfig) -> bool:
        return bool(config.match_regex or config.exclude_regex)

    def evaluate(self, repo: RawRepo, config: FilterConfig) -> FilterResult:
        """Evaluate repository name against patterns.

        Args:
            repo: Raw repository record.
            config: Filter policy.

        Returns:
            FilterResult indicating pass/fail.
        """
        # Check exclude patterns first (hard rejection)
        for pattern in config.exclude_regex:
            if re.search(pattern, repo.name):
                return FilterResult(
                    passed=False,
                    reason=f"Repository name '{repo.name}' matches exclude pattern: {pattern}",
                    filter_name=self.name,
                )

        if config.match_regex and not any(
            re.search(pattern, repo.name) for pattern in config.match_regex
        ):
            return FilterResult(
                passed=False,
                reason=f"Repository name '{repo.name}' does not match any include patterns",
                filter_name=self.name,
            )

        return FilterResult(passed=True, filter_name=self.name)
