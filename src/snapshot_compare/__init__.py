from .engine import SnapshotCompareEngine
from .cache_key import CacheKey, CacheKeySink, HashingCacheKeyBuilder, RecordingCacheKeySink
from .config import CompareConfig
from .model.change import ChangeType, FileChange
from .model.file_snapshot import FileSnapshot
from .model.snapshot import Snapshot, build_snapshot, snapshot_pairs
from .strategies.base import CompareType, TaskFilePropertyCompareStrategy
from .strategies.order_insensitive import OrderInsensitiveCompareStrategy
from .strategies.registry import StrategyRegistry, default_registry
from .errors import (
    SnapshotCompareError,
    InvalidSnapshotError,
    DuplicatePathError,
    InvalidFingerprintError,
    UnknownStrategyError,
    UnsupportedHashAlgorithmError,
    CacheKeyError,
    InvariantViolationError,
    ConfigurationError,
)

__all__ = [
    'SnapshotCompareEngine',
    'CacheKey',
    'CacheKeySink',
    'HashingCacheKeyBuilder',
    'RecordingCacheKeySink',
    'CompareConfig',
    'ChangeType',
    'FileChange',
    'FileSnapshot',
    'Snapshot',
    'build_snapshot',
    'snapshot_pairs',
    'CompareType',
    'TaskFilePropertyCompareStrategy',
    'OrderInsensitiveCompareStrategy',
    'StrategyRegistry',
    'default_registry',
    'SnapshotCompareError',
    'InvalidSnapshotError',
    'DuplicatePathError',
    'InvalidFingerprintError',
    'UnknownStrategyError',
    'UnsupportedHashAlgorithmError',
    'CacheKeyError',
    'InvariantViolationError',
    'ConfigurationError',
]
