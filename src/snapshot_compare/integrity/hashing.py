"""
Digest computation using BLAKE3 or SHA-256.

Provides the fingerprint and cache key digests. Fingerprints are raw bytes;
hex encoding is only used for display.
"""

import hashlib

import blake3

from ..errors import UnsupportedHashAlgorithmError


BLAKE3 = 'blake3'
SHA256 = 'sha256'

SUPPORTED_ALGORITHMS = (BLAKE3, SHA256)

DEFAULT_ALGORITHM = BLAKE3


def new_hasher(algorithm: str = DEFAULT_ALGORITHM):
    """
    Create a streaming hasher for the given algorithm.

    The returned object exposes update(), digest() and hexdigest().
    Raises UnsupportedHashAlgorithmError for unknown names.
    """
    if algorithm == BLAKE3:
        return blake3.blake3()
    if algorithm == SHA256:
        return hashlib.sha256()
    raise UnsupportedHashAlgorithmError(algorithm)


def compute_digest(data: bytes, algorithm: str = DEFAULT_ALGORITHM) -> bytes:
    """
    Compute the raw digest of a byte string.

    Both algorithms produce 32-byte digests.
    """
    hasher = new_hasher(algorithm)
    hasher.update(data)
    return hasher.digest()
