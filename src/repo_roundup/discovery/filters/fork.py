"""Fork status filter."""

from repo_roundup.config import FilterConfig
from repo_roundup.scm.models import RawRepo

from .base import BaseFilter, FilterResult


class ForkFilter(BaseFilter):
    """Excludes forked repositories when skip_forks is set."""

    name = "fork"

    def is_enabled(self, config: FilterConfig) -> bool:
        return config.skip_forks

    def evaluate(self, repo: RawRepo, config: FilterConfig) -> FilterResult:  # noqa: ARG002
        if repo.fork:
            return FilterResult(
                passed=False,
                reason="Repository is a fork",
                filter_name=self.name,
            )

        return FilterResult(passed=True, filter_name=self.name)
