"""
Change partition invariants and their verification.

Checks a list of emitted changes against the snapshots they were computed
from.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, List, Sequence, Set

from .errors import InvariantViolationError
from .model.change import ChangeType, FileChange
from .model.snapshot import Snapshot


@dataclass
class PartitionContext:
    """Inputs and outputs of one comparison, with the expected partition."""
    current: Snapshot
    previous: Snapshot
    changes: Sequence[FileChange]
    include_added: bool
    added: Set[str] = field(init=False)
    modified: Set[str] = field(init=False)
    removed: Set[str] = field(init=False)

    def __post_init__(self):
        self.added = set(self.current) - set(self.previous)
        self.removed = set(self.previous) - set(self.current)
        self.modified = {
            path for path in set(self.current) & set(self.previous)
            if not self.current[path].is_content_up_to_date(self.previous[path])
        }

    def paths_of(self, change_type: ChangeType) -> List[str]:
        return [c.path for c in self.changes if c.change_type is change_type]


class Invariant:
    """
    A rule that every comparison result must satisfy.
    """

    def __init__(self, name: str, description: str, check_func: Callable[[PartitionContext], bool]):
        """
        Define an invariant.

        Args:
            name: short invariant name
            description: what the rule requires
            check_func: returns True if the rule holds for a context
        """
        self.name = name
        self.description = description
        self.check_func = check_func

    def verify(self, context: PartitionContext) -> bool:
        """
        Verify this invariant holds for a context.

        Returns True if it holds, raises InvariantViolationError if not.
        """
        if not self.check_func(context):
            raise InvariantViolationError(self.name, self.description)
        return True


class ChangeInvariantRegistry:
    """
    Registry of change partition invariants.
    """

    def __init__(self):
        self.invariants: List[Invariant] = []

    def register(self, name: str, description: str, check_func: Callable[[PartitionContext], bool]) -> None:
        """Register a new invariant."""
        self.invariants.append(Invariant(name, description, check_func))

    def verify_all(self, context: PartitionContext) -> dict:
        """
        Verify all registered invariants.

        Returns dict with:
            - passed: list of invariant names that passed
            - failed: list of (name, error) tuples for failed invariants
            - all_passed: bool indicating if all passed
        """
        result = {
            'passed': [],
            'failed': [],
            'all_passed': True,
        }

        for invariant in self.invariants:
            try:
                invariant.verify(context)
                result['passed'].append(invariant.name)
            except InvariantViolationError as e:
                result['failed'].append((invariant.name, str(e)))
                result['all_passed'] = False

        return result

    def list_invariants(self) -> List[tuple]:
        """List all registered invariants as (name, description) tuples."""
        return [(inv.name, inv.description) for inv in self.invariants]


def create_partition_invariants() -> ChangeInvariantRegistry:
    """Create the invariants every order-insensitive comparison must meet."""
    registry = ChangeInvariantRegistry()

    registry.register(
        "unique_paths",
        "No path is reported more than once",
        lambda ctx: all(n == 1 for n in Counter(c.path for c in ctx.changes).values()),
    )

    registry.register(
        "added_partition",
        "Added paths are exactly the paths only in current, or none when additions are ignored",
        lambda ctx: set(ctx.paths_of(ChangeType.ADDED)) == (ctx.added if ctx.include_added else set()),
    )

    registry.register(
        "modified_partition",
        "Modified paths are exactly the shared paths whose fingerprints differ",
        lambda ctx: set(ctx.paths_of(ChangeType.MODIFIED)) == ctx.modified,
    )

    registry.register(
        "removed_partition",
        "Removed paths are exactly the paths only in previous",
        lambda ctx: set(ctx.paths_of(ChangeType.REMOVED)) == ctx.removed,
    )

    return registry


def verify_change_partition(
    current: Snapshot,
    previous: Snapshot,
    changes: Sequence[FileChange],
    include_added: bool,
) -> None:
    """
    Verify that changes partition the difference between two snapshots.

    Raises InvariantViolationError naming the first broken rule.
    """
    context = PartitionContext(current, previous, list(changes), include_added)
    for invariant in create_partition_invariants().invariants:
        invariant.verify(context)
