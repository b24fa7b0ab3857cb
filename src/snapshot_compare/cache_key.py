"""
Cache key sinks.

A sink accumulates primitives pushed by compare strategies into a task cache
key. Strategies only rely on put_string() and put_bytes().
"""

import logging
import struct
from dataclasses import dataclass
from typing import List, Optional, Protocol, Tuple

from .errors import CacheKeyError
from .integrity.hashing import DEFAULT_ALGORITHM, new_hasher


logger = logging.getLogger(__name__)

_STRING = b'S'
_BYTES = b'B'
_INT = b'I'
_BOOLEAN = b'Z'


class CacheKeySink(Protocol):
    """Anything that can receive cache key contributions."""

    def put_string(self, value: str) -> None:
        ...

    def put_bytes(self, value: bytes) -> None:
        ...


@dataclass(frozen=True)
class CacheKey:
    """Finished cache key."""
    hash: str
    algorithm: str

    def __str__(self) -> str:
        return self.hash


def encode_string(value: str) -> bytes:
    """
    Encode a string as UTF-8 for cache keys.

    Lone surrogates from undecodable filenames map back to their original
    bytes, as os.fsencode does.
    """
    return value.encode('utf-8', 'surrogateescape')


def _frame(marker: bytes, payload: bytes) -> bytes:
    # Length prefix keeps ("ab", "c") and ("a", "bc") apart.
    return marker + struct.pack('>I', len(payload)) + payload


class HashingCacheKeyBuilder:
    """
    Cache key sink backed by a streaming digest.

    Every primitive is framed with a type marker and a 4-byte big-endian
    length before it is fed to the digest. build() finalizes the key; the
    builder cannot be used afterwards.
    """

    def __init__(self, algorithm: str = DEFAULT_ALGORITHM):
        self.algorithm = algorithm
        self._hasher = new_hasher(algorithm)
        self._built: Optional[CacheKey] = None
        self._count = 0

    def _update(self, marker: bytes, payload: bytes) -> None:
        if self._built is not None:
            raise CacheKeyError("cannot add to a cache key that has already been built")
        self._hasher.update(_frame(marker, payload))
        self._count += 1

    def put_string(self, value: str) -> None:
        self._update(_STRING, encode_string(value))

    def put_bytes(self, value: bytes) -> None:
        self._update(_BYTES, bytes(value))

    def put_int(self, value: int) -> None:
        self._update(_INT, struct.pack('>q', value))

    def put_boolean(self, value: bool) -> None:
        self._update(_BOOLEAN, b'\x01' if value else b'\x00')

    def build(self) -> CacheKey:
        """
        Finalize and return the cache key.

        Raises CacheKeyError if called twice.
        """
        if self._built is not None:
            raise CacheKeyError("cache key has already been built")

        self._built = CacheKey(self._hasher.hexdigest(), self.algorithm)
        logger.debug(
            "Built %s cache key %s from %d entries",
            self.algorithm, self._built.hash, self._count,
        )
        return self._built

    def __repr__(self) -> str:
        state = 'built' if self._built is not None else 'open'
        return f"HashingCacheKeyBuilder(algorithm={self.algorithm}, entries={self._count}, {state})"


class RecordingCacheKeySink:
    """
    Sink that records every primitive pushed to it.

    Useful for inspecting exactly what a strategy contributes.
    """

    def __init__(self):
        self.entries: List[Tuple[str, object]] = []

    def put_string(self, value: str) -> None:
        self.entries.append(('string', value))

    def put_bytes(self, value: bytes) -> None:
        self.entries.append(('bytes', bytes(value)))

    def raw(self) -> bytes:
        """Concatenate the recorded primitives as framed bytes."""
        parts = []
        for kind, value in self.entries:
            if kind == 'string':
                parts.append(_frame(_STRING, encode_string(value)))
            else:
                parts.append(_frame(_BYTES, value))
        return b''.join(parts)

    def __len__(self) -> int:
        return len(self.entries)
