"""
Snapshot Compare Engine.

Main entry point tying strategies, cache key sinks and configuration together.
"""

import logging
from itertools import islice
from typing import Iterator, List, Mapping, Optional, Tuple, Union

from .cache_key import CacheKey, HashingCacheKeyBuilder
from .config import CompareConfig
from .errors import ConfigurationError
from .model.change import FileChange
from .model.snapshot import Snapshot
from .strategies.base import CompareType, TaskFilePropertyCompareStrategy
from .strategies.registry import StrategyRegistry, default_registry


logger = logging.getLogger(__name__)

_UNSET = object()

StrategyName = Union[str, CompareType, None]


class SnapshotCompareEngine:
    """
    Primary interface for comparing file property snapshots.

    This is what an up-to-date checker calls to:
    - Ask whether a property changed since the previous build
    - Collect change events for reporting
    - Compute a task cache key from several file properties
    """

    def __init__(
        self,
        config: Optional[CompareConfig] = None,
        registry: Optional[StrategyRegistry] = None,
    ):
        """
        Initialize the engine.

        Args:
            config: comparison settings, defaults when omitted
            registry: strategy registry, built-in strategies when omitted
        """
        self.config = config or CompareConfig()
        self.config.validate()
        self.registry = registry or default_registry()

    def strategy_for(self, compare_type: StrategyName = None) -> TaskFilePropertyCompareStrategy:
        """
        Look up a strategy by compare type.

        Falls back to the configured default type when compare_type is None.
        Raises UnknownStrategyError for unregistered names.
        """
        if compare_type is None:
            compare_type = self.config.default_compare_type
        return self.registry.get(compare_type)

    # ========== Change Detection ==========

    def iterate_changes(
        self,
        compare_type: StrategyName,
        current: Snapshot,
        previous: Snapshot,
        property_tag: str,
    ) -> Iterator[FileChange]:
        """Lazily iterate over changes using the selected strategy."""
        strategy = self.strategy_for(compare_type)
        return strategy.iterate_content_changes_since(current, previous, property_tag)

    def has_changes(
        self,
        compare_type: StrategyName,
        current: Snapshot,
        previous: Snapshot,
        property_tag: str,
    ) -> bool:
        """
        Check whether anything changed.

        Stops at the first change.
        """
        changes = self.iterate_changes(compare_type, current, previous, property_tag)
        return next(changes, None) is not None

    def collect_changes(
        self,
        compare_type: StrategyName,
        current: Snapshot,
        previous: Snapshot,
        property_tag: str,
        limit: Optional[int] = _UNSET,
    ) -> List[FileChange]:
        """
        Collect changes into a list.

        Args:
            limit: maximum number of changes; None for all, defaults to
                config.max_reported_changes

        Returns the changes in emission order. Raises ConfigurationError for
        a negative limit.
        """
        if limit is _UNSET:
            limit = self.config.change_limit
        elif limit is not None and limit < 0:
            raise ConfigurationError('limit', limit, "must not be negative")

        changes = self.iterate_changes(compare_type, current, previous, property_tag)
        collected = list(islice(changes, limit))

        for change in collected:
            logger.debug(change.message)

        return collected

    # ========== Cache Keys ==========

    def compute_cache_key(
        self,
        properties: Mapping[str, Tuple[StrategyName, Snapshot]],
        hash_algorithm: Optional[str] = None,
    ) -> CacheKey:
        """
        Compute a cache key from several file properties.

        Args:
            properties: property name -> (compare type, snapshot)
            hash_algorithm: digest to use, defaults to config.hash_algorithm

        Property names are visited in sorted order; each contributes its name
        followed by its strategy's canonical entries.
        """
        builder = HashingCacheKeyBuilder(hash_algorithm or self.config.hash_algorithm)

        for name in sorted(properties):
            compare_type, snapshot = properties[name]
            strategy = self.strategy_for(compare_type)
            builder.put_string(name)
            strategy.append_to_cache_key(builder, snapshot)

        key = builder.build()
        logger.debug("Computed cache key %s for %d properties", key.hash, len(properties))
        return key

    def __repr__(self) -> str:
        return (
            f"SnapshotCompareEngine("
            f"strategies={self.registry.names()}, "
            f"hash_algorithm={self.config.hash_algorithm})"
        )
