"""
Compare strategy interface.

A compare strategy decides how two snapshots of one file property are diffed
and how a snapshot contributes to the task cache key.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Iterator

from ..cache_key import CacheKeySink
from ..model.change import FileChange
from ..model.snapshot import Snapshot


class CompareType(Enum):
    """
    Comparison policies selectable per file property.

    OUTPUT ignores paths that appear only in the current snapshot, since
    outputs of other tasks may legitimately show up in a shared directory.
    """

    OUTPUT = 'output'
    UNORDERED = 'unordered'


class TaskFilePropertyCompareStrategy(ABC):
    """Fixed operation set shared by all compare strategies."""

    @abstractmethod
    def iterate_content_changes_since(
        self,
        current: Snapshot,
        previous: Snapshot,
        property_tag: str,
    ) -> Iterator[FileChange]:
        """
        Iterate over the changes from previous to current.

        The iterator is lazy and single-pass.
        """

    @abstractmethod
    def append_to_cache_key(self, sink: CacheKeySink, snapshot: Snapshot) -> None:
        """Append the snapshot's contribution to a cache key sink."""
