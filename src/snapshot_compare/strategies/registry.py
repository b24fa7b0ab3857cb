"""
Registry of compare strategies.

Callers select a strategy by compare type name from configuration.
"""

from typing import Dict, List, Union

from ..errors import UnknownStrategyError
from .base import CompareType, TaskFilePropertyCompareStrategy
from .order_insensitive import OrderInsensitiveCompareStrategy


class StrategyRegistry:
    """
    Named compare strategies.

    Strategies are stateless, so one instance per name is shared by all
    callers.
    """

    def __init__(self):
        self._strategies: Dict[str, TaskFilePropertyCompareStrategy] = {}

    def register(self, name: Union[str, CompareType], strategy: TaskFilePropertyCompareStrategy) -> None:
        """Register a strategy, replacing any previous one with the same name."""
        if not isinstance(strategy, TaskFilePropertyCompareStrategy):
            raise TypeError(
                f"Strategy must implement TaskFilePropertyCompareStrategy, got {type(strategy).__name__}"
            )
        self._strategies[_name(name)] = strategy

    def get(self, name: Union[str, CompareType]) -> TaskFilePropertyCompareStrategy:
        """
        Get a strategy by name.

        Raises UnknownStrategyError if nothing is registered under the name.
        """
        key = _name(name)
        try:
            return self._strategies[key]
        except KeyError:
            raise UnknownStrategyError(key, self.names())

    def names(self) -> List[str]:
        return sorted(self._strategies)

    def __contains__(self, name: Union[str, CompareType]) -> bool:
        return _name(name) in self._strategies


def _name(name: Union[str, CompareType]) -> str:
    if isinstance(name, CompareType):
        return name.value
    return name


def default_registry() -> StrategyRegistry:
    """Create a registry holding the built-in compare types."""
    registry = StrategyRegistry()
    registry.register(CompareType.OUTPUT, OrderInsensitiveCompareStrategy(include_added=False))
    registry.register(CompareType.UNORDERED, OrderInsensitiveCompareStrategy(include_added=True))
    return registry
