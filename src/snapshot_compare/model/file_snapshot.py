"""
File snapshot model.

A file snapshot holds the content fingerprint of one entry of a file property.
"""

from typing import Optional

from ..integrity.hashing import DEFAULT_ALGORITHM, compute_digest


class FileSnapshot:
    """
    Immutable fingerprint of a single file-property entry.

    The fingerprint is an opaque byte sequence. Two snapshots are up to date
    with each other when their fingerprints are byte-equal; object identity
    plays no part.
    """

    __slots__ = ('_hash',)

    def __init__(self, hash: bytes):
        """
        Create a file snapshot.

        Args:
            hash: content fingerprint bytes
        """
        if not isinstance(hash, (bytes, bytearray, memoryview)):
            raise TypeError(f"Fingerprint must be bytes, got {type(hash).__name__}")
        self._hash = bytes(hash)

    @property
    def hash(self) -> bytes:
        return self._hash

    @classmethod
    def from_content(cls, data: bytes, algorithm: str = DEFAULT_ALGORITHM) -> 'FileSnapshot':
        """Fingerprint raw content bytes."""
        return cls(compute_digest(data, algorithm))

    @classmethod
    def from_hex(cls, hex_hash: str) -> 'FileSnapshot':
        return cls(bytes.fromhex(hex_hash))

    def is_content_up_to_date(self, other: 'FileSnapshot') -> bool:
        """
        Check whether another snapshot has the same content.

        Compares fingerprint bytes.
        """
        return self._hash == other.hash

    def hex(self) -> str:
        return self._hash.hex()

    def to_dict(self) -> dict:
        """Convert to a JSON-safe dictionary."""
        return {'hash': self.hex()}

    @classmethod
    def from_dict(cls, data: dict) -> 'FileSnapshot':
        """
        Reconstruct a file snapshot from its dictionary form.

        Raises ValueError if data is invalid.
        """
        if 'hash' not in data:
            raise ValueError("File snapshot missing hash field")

        try:
            return cls.from_hex(data['hash'])
        except (TypeError, ValueError) as e:
            raise ValueError(f"Failed to decode file snapshot hash: {e}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FileSnapshot):
            return NotImplemented
        return self._hash == other._hash

    def __hash__(self) -> int:
        return hash(self._hash)

    def __repr__(self) -> str:
        return f"FileSnapshot(hash={self.hex()[:8]}...)"


def fingerprint_bytes(value) -> Optional[bytes]:
    """
    Return the fingerprint bytes of a snapshot value.

    Accepts FileSnapshot instances and raw byte sequences; returns None for
    anything else.
    """
    if isinstance(value, FileSnapshot):
        return value.hash
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    return None
