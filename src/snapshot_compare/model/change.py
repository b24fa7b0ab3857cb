"""
Change event model.

Change events describe how one entry of a file property differs between two
snapshots.
"""

from dataclasses import dataclass
from enum import Enum


class ChangeType(Enum):
    """Kind of change detected for a single path."""

    ADDED = 'added'
    MODIFIED = 'modified'
    REMOVED = 'removed'

    def describe(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    ChangeType.ADDED: 'has been added',
    ChangeType.MODIFIED: 'has changed',
    ChangeType.REMOVED: 'has been removed',
}


@dataclass(frozen=True)
class FileChange:
    """
    A change to one path of a file property.

    property_tag is carried through unchanged for reporting; nothing in this
    package interprets it.
    """
    path: str
    change_type: ChangeType
    property_tag: str

    @property
    def message(self) -> str:
        """Human-readable description, e.g. "Input file a.txt has changed."."""
        return f"{self.property_tag} file {self.path} {self.change_type.describe()}."

