"""
Order-insensitive comparison of file properties.

Treats a snapshot as an unordered mapping from path to fingerprint.
"""

import logging
from typing import Iterator, List, Tuple

from ..cache_key import CacheKeySink, encode_string
from ..model.change import ChangeType, FileChange
from ..model.snapshot import Snapshot
from .base import TaskFilePropertyCompareStrategy


logger = logging.getLogger(__name__)


class OrderInsensitiveCompareStrategy(TaskFilePropertyCompareStrategy):
    """
    Compare strategy for properties whose entry order has no meaning.

    Changes are reported per path:
    - ADDED: path only in current (only when include_added is set)
    - MODIFIED: path in both, fingerprints differ by content
    - REMOVED: path only in previous

    Cache key contributions are sorted, so two snapshots with the same
    (path, fingerprint) pairs contribute identical bytes however they were
    enumerated.
    """

    def __init__(self, include_added: bool):
        self.include_added = include_added

    def iterate_content_changes_since(
        self,
        current: Snapshot,
        previous: Snapshot,
        property_tag: str,
    ) -> Iterator[FileChange]:
        """
        Lazily iterate over the changes from previous to current.

        Paths of current are visited first, in current's iteration order.
        Removed paths follow in no particular order. The returned generator
        cannot be restarted and never touches previous.
        """
        # Taken before the generator starts; previous itself is never mutated.
        remaining_previous = dict(previous)
        return self._changes(current, remaining_previous, property_tag)

    def _changes(
        self,
        current: Snapshot,
        remaining_previous: dict,
        property_tag: str,
    ) -> Iterator[FileChange]:
        for path, current_file in current.items():
            previous_file = remaining_previous.pop(path, None)
            if previous_file is None:
                if self.include_added:
                    yield FileChange(path, ChangeType.ADDED, property_tag)
            elif not current_file.is_content_up_to_date(previous_file):
                yield FileChange(path, ChangeType.MODIFIED, property_tag)

        # Everything left exists only in previous.
        for path in remaining_previous:
            yield FileChange(path, ChangeType.REMOVED, property_tag)

    def append_to_cache_key(self, sink: CacheKeySink, snapshot: Snapshot) -> None:
        """
        Append path and fingerprint of every entry, in canonical order.

        Entries are sorted by UTF-8 path bytes, then fingerprint length, then
        fingerprint bytes.
        """
        entries = sorted_key_entries(snapshot)

        for path, fingerprint in entries:
            sink.put_string(path)
            sink.put_bytes(fingerprint)

        logger.debug("Appended %d entries to cache key", len(entries))

    def __repr__(self) -> str:
        return f"OrderInsensitiveCompareStrategy(include_added={self.include_added})"


KeyEntry = Tuple[bytes, int, bytes, str]


def _key_entry(path: str, file_snapshot) -> KeyEntry:
    """Sort record: (path bytes, fingerprint length, fingerprint, path)."""
    fingerprint = file_snapshot.hash
    return (encode_string(path), len(fingerprint), fingerprint, path)


def sorted_key_entries(snapshot: Snapshot) -> List[Tuple[str, bytes]]:
    """Return (path, fingerprint) pairs in the order used for cache keys."""
    entries = sorted(_key_entry(path, file_snapshot) for path, file_snapshot in snapshot.items())
    return [(path, fingerprint) for _, _, fingerprint, path in entries]
