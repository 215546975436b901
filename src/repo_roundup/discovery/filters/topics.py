"""Topics filter for repository discovery."""

from repo_roundup.config import FilterConfig
from repo_roundup.scm.models import RawRepo

from .base import BaseFilter, FilterResult


class TopicsFilter(BaseFilter):
    """Filter repositories based on topics.

    When an allow-list is configured, a repository passes only if at least
    one of its topics equals an allowed topic, ignoring case. An empty
    allow-list disables the filter.
    """

    name = "topics"

    def is_enabled(self, config: FilterConfig) -> bool:
        return bool(config.topics)

    def evaluate(self, repo: RawRepo, config: FilterConfig) -> FilterResult:
        """Evaluate repository topics.

        Args:
            repo: Raw repository record.
            config: Filter policy with the topic allow-list.

        Returns:
            FilterResult indicating pass/fail.
        """
        allowed = {topic.casefold() for topic in config.topics}
        repo_topics = {topic.casefold() for topic in repo.topics}

        if not repo_topics & allowed:
            return FilterResult(
                passed=False,
                reason=f"Repository must have at least one of: {', '.join(config.topics)}",
                filter_name=self.name,
            )

        return FilterResult(passed=True, filter_name=self.name)
