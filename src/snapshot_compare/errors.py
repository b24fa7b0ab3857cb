"""
Error types for snapshot comparison.

Comparison and canonicalization never swallow errors: anything raised by a
caller-supplied mapping or fingerprint propagates unchanged. The types below
cover the package's own validation points.
"""


class SnapshotCompareError(Exception):
    """Base exception for all snapshot comparison errors."""
    pass


class InvalidSnapshotError(SnapshotCompareError):
    """Raised when a snapshot cannot be built from the given entries."""

    def __init__(self, reason: str, path: str = None):
        self.reason = reason
        self.path = path
        msg = f"Invalid snapshot: {reason}"
        if path is not None:
            msg += f" (path: {path})"
        super().__init__(msg)


class DuplicatePathError(InvalidSnapshotError):
    """Raised when a path appears more than once in a snapshot."""

    def __init__(self, path: str):
        super().__init__("duplicate path", path)


class InvalidFingerprintError(InvalidSnapshotError):
    """Raised when a fingerprint is not a byte sequence."""

    def __init__(self, path: str, value_type: str):
        self.value_type = value_type
        super().__init__(f"fingerprint must be bytes, got {value_type}", path)


class UnknownStrategyError(SnapshotCompareError):
    """Raised when a compare strategy name is not registered."""

    def __init__(self, name: str, known: list = None):
        self.name = name
        self.known = list(known or [])
        msg = f"Unknown compare strategy: {name}"
        if self.known:
            msg += f"\nKnown strategies: {', '.join(self.known)}"
        super().__init__(msg)


class UnsupportedHashAlgorithmError(SnapshotCompareError):
    """Raised when a digest algorithm is not supported."""

    def __init__(self, algorithm: str):
        self.algorithm = algorithm
        super().__init__(f"Unsupported hash algorithm: {algorithm}")


class CacheKeyError(SnapshotCompareError):
    """Raised when a cache key builder is misused."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Cache key error: {reason}")


class InvariantViolationError(SnapshotCompareError):
    """Raised when emitted changes break the change partition."""

    def __init__(self, invariant: str, details: str):
        self.invariant = invariant
        self.details = details
        super().__init__(f"Invariant violation: {invariant}\nDetails: {details}")


class ConfigurationError(SnapshotCompareError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value, reason: str):
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid configuration for {key}={value!r}: {reason}")
