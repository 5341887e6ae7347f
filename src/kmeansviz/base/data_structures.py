"""
Core data structures for the step-by-step K-Means engine.

This module provides the value types the engine reports to its caller:
points, the initialization method selector, per-step outcomes, history
snapshots and the full engine state.
"""

from typing import Optional, List, Tuple, Dict, Any, NamedTuple, Union
from enum import Enum
from dataclasses import dataclass, field
from torch import Tensor


class Point(NamedTuple):
    """An immutable 2-D point."""
    x: float
    y: float


def tensor_to_points(values: Tensor) -> List[Point]:
    """Convert an (n, 2) tensor into a list of Points."""
    return [Point(float(row[0]), float(row[1])) for row in values.detach().cpu().tolist()]


class InitMethod(Enum):
    """Closed set of centroid initialization methods."""

    RANDOM = 'random'
    FARTHEST_FIRST = 'farthest-first'
    KMEANS_PLUS_PLUS = 'kmeans++'
    MANUAL = 'manual'

    @classmethod
    def parse(cls, value: Union['InitMethod', str]) -> 'InitMethod':
        """Resolve an InitMethod from the enum itself or a string spelling.

        Raises:
            ValueError: If the value does not name a known method
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            if key in _INIT_ALIASES:
                return _INIT_ALIASES[key]
        raise ValueError(f"Unknown init method: {value!r}")


_INIT_ALIASES: Dict[str, InitMethod] = {
    'random': InitMethod.RANDOM,
    'farthest': InitMethod.FARTHEST_FIRST,
    'farthest-first': InitMethod.FARTHEST_FIRST,
    'farthest_first': InitMethod.FARTHEST_FIRST,
    'kmeans++': InitMethod.KMEANS_PLUS_PLUS,
    'k-means++': InitMethod.KMEANS_PLUS_PLUS,
    'manual': InitMethod.MANUAL,
}


class StepOutcome(Enum):
    """Signal returned by a single engine step."""

    CONTINUE = 'continue'
    STOPPED = 'stopped'

    @property
    def converged(self) -> bool:
        return self is StepOutcome.STOPPED


@dataclass(frozen=True, eq=False)
class HistoryEntry:
    """Snapshot of centroids and assignments after one engine call.

    The entry recorded at initialization has an empty assignment and no
    inertia. Entries recorded by a step hold the candidate centroids that
    step computed, even when the step reported convergence.

    ``inertia`` is measured against the centroids the step started from,
    not the candidates stored in the same entry: it scores ``assignments``
    under the centroids that produced them.
    """

    centroids: Tensor      # (k, 2)
    assignments: Tensor    # (n,) long, or (0,) at initialization
    inertia: Optional[float] = None

    @property
    def is_initial(self) -> bool:
        return self.assignments.numel() == 0 and self.inertia is None

    def centroid_points(self) -> List[Point]:
        return tensor_to_points(self.centroids)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-Python view suitable for JSON encoding."""
        return {
            'centroids': [list(p) for p in self.centroid_points()],
            'assignments': [int(a) for a in self.assignments.tolist()],
            'inertia': self.inertia,
        }


@dataclass(frozen=True)
class RunResult:
    """Outcome of running the engine until convergence or a step limit."""

    converged: bool
    n_steps: int


@dataclass
class EngineState:
    """Complete state of a clustering engine at a point in time.

    Invariants:
    - ``len(centroids) == n_clusters`` once initialized, 0 before
    - ``len(assignments) == len(points)`` once any step has run
    - ``len(history) >= 1`` once initialized
    """

    points: Tensor
    n_clusters: int
    init: InitMethod
    centroids: Tensor
    assignments: Tensor
    history: Tuple[HistoryEntry, ...] = ()
    converged: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_initialized(self) -> bool:
        return self.centroids.shape[0] > 0
