"""
Property snapshot helpers.

A property snapshot is a plain mapping from path to FileSnapshot. Iteration
order of the mapping carries no meaning.
"""

from typing import Dict, FrozenSet, Iterable, Mapping, Tuple

from ..errors import DuplicatePathError, InvalidFingerprintError, InvalidSnapshotError
from .file_snapshot import FileSnapshot, fingerprint_bytes


Snapshot = Mapping[str, FileSnapshot]


def build_snapshot(pairs: Iterable[Tuple[str, object]]) -> Dict[str, FileSnapshot]:
    """
    Build a snapshot from (path, fingerprint) pairs.

    Fingerprints may be FileSnapshot instances or raw bytes. Insertion order
    follows the order of pairs.

    Raises DuplicatePathError if a path repeats, InvalidFingerprintError if a
    fingerprint is not a byte sequence.
    """
    snapshot: Dict[str, FileSnapshot] = {}

    for path, value in pairs:
        if not isinstance(path, str):
            raise InvalidSnapshotError(f"path must be a string, got {type(path).__name__}")

        if path in snapshot:
            raise DuplicatePathError(path)

        if isinstance(value, FileSnapshot):
            snapshot[path] = value
            continue

        raw = fingerprint_bytes(value)
        if raw is None:
            raise InvalidFingerprintError(path, type(value).__name__)
        snapshot[path] = FileSnapshot(raw)

    return snapshot


def snapshot_pairs(snapshot: Snapshot) -> FrozenSet[Tuple[str, bytes]]:
    """
    Get the set of (path, fingerprint bytes) pairs of a snapshot.

    Two snapshots are equivalent exactly when their pair sets are equal.
    """
    return frozenset((path, file_snapshot.hash) for path, file_snapshot in snapshot.items())
