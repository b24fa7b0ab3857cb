"""
Configuration for snapshot comparison.

Defaults can be overridden through environment variables.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ConfigurationError
from .integrity.hashing import DEFAULT_ALGORITHM, SUPPORTED_ALGORITHMS
from .strategies.base import CompareType


logger = logging.getLogger(__name__)

ENV_HASH_ALGORITHM = 'SNAPSHOT_COMPARE_HASH_ALGORITHM'
ENV_MAX_REPORTED_CHANGES = 'SNAPSHOT_COMPARE_MAX_REPORTED_CHANGES'
ENV_DEFAULT_TYPE = 'SNAPSHOT_COMPARE_DEFAULT_TYPE'


@dataclass
class CompareConfig:
    """
    Settings for the comparison engine.

    max_reported_changes caps collect_changes(); 0 means no cap.
    """
    hash_algorithm: str = DEFAULT_ALGORITHM
    max_reported_changes: int = 100
    default_compare_type: str = CompareType.UNORDERED.value

    def validate(self) -> None:
        """Raise ConfigurationError if any value is out of range."""
        if self.hash_algorithm not in SUPPORTED_ALGORITHMS:
            raise ConfigurationError(
                'hash_algorithm', self.hash_algorithm,
                f"expected one of {', '.join(SUPPORTED_ALGORITHMS)}",
            )

        if isinstance(self.max_reported_changes, bool) or not isinstance(self.max_reported_changes, int):
            raise ConfigurationError('max_reported_changes', self.max_reported_changes, "expected an integer")
        if self.max_reported_changes < 0:
            raise ConfigurationError('max_reported_changes', self.max_reported_changes, "must not be negative")

        known_types = [t.value for t in CompareType]
        if self.default_compare_type not in known_types:
            raise ConfigurationError(
                'default_compare_type', self.default_compare_type,
                f"expected one of {', '.join(known_types)}",
            )

    @property
    def change_limit(self) -> Optional[int]:
        """Effective cap for collected changes, None when unlimited."""
        return self.max_reported_changes or None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'CompareConfig':
        """
        Build a configuration from environment variables.

        Unset variables keep their defaults. Raises ConfigurationError on
        invalid values.
        """
        if environ is None:
            environ = os.environ

        config = cls()

        if ENV_HASH_ALGORITHM in environ:
            config.hash_algorithm = environ[ENV_HASH_ALGORITHM].strip().lower()

        if ENV_MAX_REPORTED_CHANGES in environ:
            raw = environ[ENV_MAX_REPORTED_CHANGES]
            try:
                config.max_reported_changes = int(raw)
            except ValueError:
                raise ConfigurationError('max_reported_changes', raw, "expected an integer")

        if ENV_DEFAULT_TYPE in environ:
            config.default_compare_type = environ[ENV_DEFAULT_TYPE].strip().lower()

        config.validate()
        logger.debug("Loaded compare config from environment: %s", config)
        return config
