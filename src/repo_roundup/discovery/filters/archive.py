"""Archive status filter."""

from repo_roundup.config import FilterConfig
from repo_roundup.scm.models import RawRepo

from .base import BaseFilter, FilterResult


class ArchiveFilter(BaseFilter):
    """Excludes archived repositories when skip_archived is set."""

    name = "archive"

    def is_enabled(self, config: FilterConfig) -> bool:
        return config.skip_archived

    def evaluate(self, repo: RawRepo, config: FilterConfig) -> FilterResult:  # noqa: ARG002
        if repo.archived:
            return FilterResult(
                passed=False,
                reason="Repository is archived",
                filter_name=self.name,
            )

        return FilterResult(passed=True, filter_name=self.name)
