"""Repository filters.

Provides a composable filter chain applying archive, fork, topic and name
pattern policy to raw repository records.
"""

from repo_roundup.discovery.filters.archive import ArchiveFilter
from repo_roundup.discovery.filters.base import BaseFilter, FilterResult
from repo_roundup.discovery.filters.chain import FilterChain
from repo_roundup.discovery.filters.fork import ForkFilter
from repo_roundup.discovery.filters.name_pattern import NamePatternFilter
from repo_roundup.discovery.filters.topics import TopicsFilter

__all__ = [
    "ArchiveFilter",
    "BaseFilter",
    "FilterChain",
    "FilterResult",
    "ForkFilter",
    "NamePatternFilter",
    "TopicsFilter",
]
