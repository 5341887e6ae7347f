"""
Step-by-step K-Means clustering engine.

The engine owns a fixed 2-D dataset, the current centroids, the current
assignment and the full iteration history, and advances the classic
assign/update loop one step at a time so every intermediate state can be
inspected or replayed.
"""

from typing import Optional, List, Dict, Any, Sequence, Union
import math
import numbers
import time
import warnings
import numpy as np
import torch
from torch import Tensor

from ..base.interfaces import (
    InitializationStrategy, AssignmentStrategy, ParameterUpdater,
    ConvergenceCriterion, ClusteringObjective
)
from ..base.data_structures import (
    InitMethod, StepOutcome, HistoryEntry, RunResult, EngineState
)
from ..base.exceptions import ConfigurationError, SequencingError
from ..assignments.hard import HardAssignment
from ..updates.mean import MeanUpdater
from ..initialization.random import RandomInit
from ..initialization.farthest_first import FarthestFirstInit
from ..initialization.kmeans_plusplus import KMeansPlusPlusInit
from ..initialization.manual import ManualInit
from ..utils.convergence import CentroidShift
from ..utils.metrics import inertia, max_centroid_shift
from ..utils.validation import validate_data, check_n_clusters, check_random_state


PointsLike = Union[Tensor, np.ndarray, Sequence]


class KMeansObjective(ClusteringObjective):
    """K-means objective: sum of squared distances to assigned centroids."""

    def compute(self, points: Tensor, centroids: Tensor,
                assignments: Tensor) -> float:
        """Compute within-cluster sum of squares."""
        return inertia(points, assignments, centroids)



class ClusteringEngine:
    """Interactive K-Means engine with a replayable step history.

    Parameters
    ----------
    points : Tensor, ndarray or sequence of (x, y) pairs
        The dataset, fixed for the lifetime of the engine
    n_clusters : int
        Number of clusters k
    init : InitMethod or str, default=InitMethod.RANDOM
        Initialization method: 'random', 'farthest-first', 'kmeans++' or
        'manual'. In manual mode centroids arrive through
        ``set_manual_centroids``.
    tol : float, default=1e-4
        A step converges when no centroid would move further than this
    max_iter : int, optional
        Step limit for ``run_full``. None (default) runs until convergence.
    verbose : int, default=0
        Verbosity level (0=silent, 1=progress, 2=per-step detail)
    random_state : int or torch.Generator, optional
        Random source for initialization and empty-cluster re-seeding
    first_index : int, optional
        Dataset index of the first centroid for 'farthest-first' and
        'kmeans++'. If None it is drawn at random. Ignored by other methods.
    device : torch.device, optional
        Device for computation, CPU by default
    dtype : torch.dtype, default=torch.float64
        Floating point type of points and centroids

    Attributes
    ----------
    converged_ : bool
        Whether the last step reported convergence
    n_steps_ : int
        Steps taken since the last initialization
    """

    def __init__(self,
                 points: PointsLike,
                 n_clusters: int,
                 init: Union[InitMethod, str] = InitMethod.RANDOM,
                 tol: float = 1e-4,
                 max_iter: Optional[int] = None,
                 verbose: int = 0,
                 random_state: Optional[Union[int, torch.Generator]] = None,
                 first_index: Optional[int] = None,
                 device: Optional[torch.device] = None,
                 dtype: torch.dtype = torch.float64):
        self.device = self._resolve_device(device)
        self.dtype = self._check_dtype(dtype)
        self.points_ = validate_data(points, dtype=dtype, device=self.device)

        self.n_clusters = n_clusters
        self.init = self._parse_init(init)
        self.tol = self._check_tol(tol)
        self.max_iter = self._check_max_iter(max_iter)
        self.verbose = verbose
        self.random_state = random_state
        self._generator = check_random_state(random_state)
        self.first_index = self._check_first_index(first_index)

        # These are set by _create_components
        self.initialization_strategy: Optional[InitializationStrategy] = None
        self.assignment_strategy: Optional[AssignmentStrategy] = None
        self.update_strategy: Optional[ParameterUpdater] = None
        self.convergence_criterion: Optional[ConvergenceCriterion] = None
        self.objective: Optional[ClusteringObjective] = None
        self._create_components()

        # Engine state
        self._centroids = self._empty_centroids()
        self._assignments = self._empty_assignments()
        self._history: List[HistoryEntry] = []
        self.converged_ = False
        self.n_steps_ = 0

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_init(init: Union[InitMethod, str]) -> InitMethod:
        try:
            return InitMethod.parse(init)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

    @staticmethod
    def _check_max_iter(max_iter: Optional[int]) -> Optional[int]:
        if max_iter is None:
            return None
        if isinstance(max_iter, bool) or not isinstance(max_iter, (int, np.integer)) or max_iter < 0:
            raise ConfigurationError(f"max_iter must be a non-negative int or None, got {max_iter!r}")
        return int(max_iter)

    @staticmethod
    def _check_tol(tol: float) -> float:
        if isinstance(tol, bool) or not isinstance(tol, numbers.Real) \
                or not math.isfinite(tol) or tol < 0:
            raise ConfigurationError(f"tol must be a finite non-negative number, got {tol!r}")
        return float(tol)

    @staticmethod
    def _check_first_index(first_index: Optional[int]) -> Optional[int]:
        if first_index is None:
            return None
        if isinstance(first_index, bool) or not isinstance(first_index, (int, np.integer)) \
                or first_index < 0:
            raise ConfigurationError(f"first_index must be a non-negative int or None, "
                                     f"got {first_index!r}")
        return int(first_index)

    @staticmethod
    def _check_dtype(dtype: torch.dtype) -> torch.dtype:
        if not isinstance(dtype, torch.dtype) or not dtype.is_floating_point:
            raise ConfigurationError(f"dtype must be a floating point torch.dtype, got {dtype!r}")
        return dtype

    @staticmethod
    def _resolve_device(device: Optional[torch.device]) -> torch.device:
        if device is None:
            return torch.device('cpu')
        try:
            return torch.device(device)
        except (TypeError, RuntimeError, ValueError) as e:
            raise ConfigurationError(f"Invalid device {device!r}: {e}") from e

    def _create_components(self) -> None:
        """Create the engine's pluggable components."""
        self.assignment_strategy = HardAssignment()
        self.update_strategy = MeanUpdater()

        if self.init is InitMethod.RANDOM:
            self.initialization_strategy = RandomInit()
        elif self.init is InitMethod.FARTHEST_FIRST:
            self.initialization_strategy = FarthestFirstInit(first_index=self.first_index)
        elif self.init is InitMethod.KMEANS_PLUS_PLUS:
            self.initialization_strategy = KMeansPlusPlusInit(first_index=self.first_index)
        else:
            # Manual centroids come through set_manual_centroids
            self.initialization_strategy = None

        self.convergence_criterion = CentroidShift(tol=self.tol)
        self.objective = KMeansObjective()

    def get_params(self) -> Dict[str, Any]:
        """Get configuration parameters."""
        return {
            'n_clusters': self.n_clusters,
            'init': self.init,
            'tol': self.tol,
            'max_iter': self.max_iter,
            'verbose': self.verbose,
            'random_state': self.random_state,
            'first_index': self.first_index,
            'device': self.device,
            'dtype': self.dtype
        }

    def set_params(self, **params) -> 'ClusteringEngine':
        """Set configuration parameters.

        Every value is validated before any is applied, so a rejected call
        leaves the engine untouched. Changing anything other than
        ``verbose`` or ``max_iter`` resets the engine, since existing
        centroids and history no longer match.

        Raises:
            ConfigurationError: If a key is unknown or a value is invalid
        """
        unknown = set(params) - set(self.get_params())
        if unknown:
            raise ConfigurationError(f"Unknown parameters: {sorted(unknown)}")

        if 'init' in params:
            params['init'] = self._parse_init(params['init'])
        if 'tol' in params:
            params['tol'] = self._check_tol(params['tol'])
        if 'max_iter' in params:
            params['max_iter'] = self._check_max_iter(params['max_iter'])
        if 'first_index' in params:
            params['first_index'] = self._check_first_index(params['first_index'])
        if 'dtype' in params:
            params['dtype'] = self._check_dtype(params['dtype'])
        if 'device' in params:
            params['device'] = self._resolve_device(params['device'])

        generator = self._generator
        if 'random_state' in params:
            generator = check_random_state(params['random_state'])

        points = self.points_
        if 'device' in params or 'dtype' in params:
            try:
                points = points.to(device=params.get('device', self.device),
                                   dtype=params.get('dtype', self.dtype))
            except (RuntimeError, AssertionError) as e:
                raise ConfigurationError(f"Cannot move points: {e}") from e

        for key, value in params.items():
            setattr(self, key, value)
        self._generator = generator
        self.points_ = points

        if set(params) - {'verbose', 'max_iter'}:
            self._create_components()
            self.reset()
        return self

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def initialize(self) -> Tensor:
        """Choose initial centroids with the configured method.

        Returns:
            (k, 2) tensor of the new centroids

        Raises:
            SequencingError: In manual mode
            ConfigurationError: If k is invalid, the dataset is empty, or
                ``first_index`` is out of range
        """
        if self.init is InitMethod.MANUAL:
            raise SequencingError("initialize() is not available in manual mode; "
                                  "use set_manual_centroids()")

        n_points = self.points_.shape[0]
        if n_points == 0:
            raise ConfigurationError("Cannot initialize centroids from an empty dataset")
        check_n_clusters(self.n_clusters, n_points)

        if self.verbose:
            print(f"Initializing {self.n_clusters} clusters ({self.init.value})...")

        try:
            centroids = self.initialization_strategy.initialize(
                self.points_, self.n_clusters, generator=self._generator
            )
        except ValueError as e:
            # first_index outside the dataset
            raise ConfigurationError(str(e)) from e
        self._start(centroids)
        return centroids.clone()

    def set_manual_centroids(self, centroids: PointsLike) -> Tensor:
        """Use externally chosen centroids, taken verbatim.

        Args:
            centroids: Exactly k points

        Returns:
            (k, 2) tensor of the new centroids

        Raises:
            SequencingError: If the engine is not in manual mode
            ConfigurationError: If k is invalid or the count differs from k
        """
        if self.init is not InitMethod.MANUAL:
            raise SequencingError(f"set_manual_centroids() requires manual mode, "
                                  f"engine uses {self.init.value!r}")
        check_n_clusters(self.n_clusters)

        validated = ManualInit(centroids).initialize(self.points_, self.n_clusters)

        if self.verbose:
            print(f"Using {self.n_clusters} manually chosen centroids")

        self._start(validated)
        return validated.clone()

    def _start(self, centroids: Tensor) -> None:
        """Install fresh centroids and record the initialization entry."""
        self._centroids = centroids.clone()
        self._assignments = self._empty_assignments()
        self._history.append(HistoryEntry(
            centroids=centroids.clone(),
            assignments=self._empty_assignments()
        ))
        self.converged_ = False
        self.n_steps_ = 0
        self.convergence_criterion.reset()

    def step(self) -> StepOutcome:
        """Advance one assign/update iteration.

        Appends exactly one history entry holding the candidate centroids and
        the assignment just computed. If every candidate lies within ``tol``
        of its current centroid the centroids stay as they are and STOPPED is
        returned; otherwise the candidates replace them and CONTINUE is
        returned.

        Raises:
            SequencingError: If no centroids exist yet
        """
        if not self.is_initialized:
            raise SequencingError("step() called before centroids were initialized")

        step_start = time.time()
        X = self.points_
        current = self._centroids

        assignments = self.assignment_strategy.compute_assignments(X, current)
        candidates = self.update_strategy.update(
            X, assignments, current, generator=self._generator
        )
        objective_value = self.objective.compute(X, current, assignments)
        converged = self.convergence_criterion.check({
            'iteration': self.n_steps_,
            'centroids': current,
            'candidates': candidates
        })

        self._history.append(HistoryEntry(
            centroids=candidates.clone(),
            assignments=assignments.clone(),
            inertia=objective_value
        ))
        self._assignments = assignments
        if not converged:
            self._centroids = candidates
        self.converged_ = converged
        self.n_steps_ += 1

        if self.verbose >= 2:
            shift = max_centroid_shift(current, candidates)
            print(f"Step {self.n_steps_:3d}: inertia = {objective_value:.6f} "
                  f"max shift = {shift:.6f} ({time.time() - step_start:.3f}s)")
        if converged and self.verbose:
            print(f"Converged at step {self.n_steps_}")

        return StepOutcome.STOPPED if converged else StepOutcome.CONTINUE

    def run_full(self, max_iter: Optional[int] = None) -> RunResult:
        """Step until convergence or until the step limit is reached.

        Args:
            max_iter: Step limit for this call, overriding the engine's
                ``max_iter``. None on both means no limit.

        Returns:
            RunResult with the convergence flag and the number of steps taken

        Raises:
            SequencingError: If no centroids exist yet
        """
        if not self.is_initialized:
            raise SequencingError("run_full() called before centroids were initialized")

        limit = self._check_max_iter(max_iter) if max_iter is not None else self.max_iter
        start_time = time.time()
        n_taken = 0
        outcome = StepOutcome.CONTINUE

        while limit is None or n_taken < limit:
            outcome = self.step()
            n_taken += 1
            if outcome.converged:
                break

        converged = outcome.converged
        if not converged:
            warnings.warn(f"Failed to converge after {n_taken} steps", RuntimeWarning)
        if self.verbose:
            print(f"Ran {n_taken} steps in {time.time() - start_time:.3f}s")

        return RunResult(converged=converged, n_steps=n_taken)

    def reset(self) -> None:
        """Discard centroids, assignment and history.

        The dataset, k and the initialization method are kept. A fresh
        ``initialize()`` or ``set_manual_centroids()`` is needed before
        stepping again.
        """
        self._centroids = self._empty_centroids()
        self._assignments = self._empty_assignments()
        self._history = []
        self.converged_ = False
        self.n_steps_ = 0
        self.convergence_criterion.reset()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def is_initialized(self) -> bool:
        return self._centroids.shape[0] > 0

    @property
    def centroids(self) -> Tensor:
        """Current (k, 2) centroids, or (0, 2) before initialization."""
        return self._centroids.clone()

    @property
    def assignments(self) -> Tensor:
        """Current (n,) assignment, or (0,) before the first step."""
        return self._assignments.clone()

    @property
    def history(self) -> tuple:
        """All history entries, oldest first."""
        return tuple(self._copy_entry(e) for e in self._history)

    @property
    def state(self) -> EngineState:
        """Snapshot of the full engine state."""
        return EngineState(
            points=self.points_.clone(),
            n_clusters=self.n_clusters,
            init=self.init,
            centroids=self.centroids,
            assignments=self.assignments,
            history=self.history,
            converged=self.converged_,
            metadata={'n_steps': self.n_steps_}
        )

    def replay(self, index: int) -> HistoryEntry:
        """Return history entry ``index`` (negative indices count from the end)."""
        n_entries = len(self._history)
        if not -n_entries <= index < n_entries:
            raise IndexError(f"History index {index} out of range for {n_entries} entries")
        return self._copy_entry(self._history[index])

    def predict(self, points: PointsLike) -> Tensor:
        """Label arbitrary points by their nearest current centroid.

        Args:
            points: (m, 2) points

        Returns:
            (m,) long tensor of cluster indices
        """
        if not self.is_initialized:
            raise SequencingError("predict() called before centroids were initialized")
        X = validate_data(points, dtype=self.dtype, device=self.device)
        return self.assignment_strategy.compute_assignments(X, self._centroids)

    @property
    def cluster_centers_(self) -> Tensor:
        """Get current centroids."""
        if not self.is_initialized:
            raise SequencingError("Engine must be initialized first")
        return self.centroids

    @property
    def labels_(self) -> Tensor:
        """Get the assignment from the most recent step."""
        if self.n_steps_ == 0:
            raise SequencingError("No step has been taken yet")
        return self.assignments

    @property
    def inertia_(self) -> float:
        """Within-cluster sum of squares measured by the most recent step."""
        if self.n_steps_ == 0:
            raise SequencingError("No step has been taken yet")
        return self._history[-1].inertia

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _empty_centroids(self) -> Tensor:
        return torch.empty(0, 2, dtype=self.dtype, device=self.device)

    def _empty_assignments(self) -> Tensor:
        return torch.empty(0, dtype=torch.long, device=self.device)

    @staticmethod
    def _copy_entry(entry: HistoryEntry) -> HistoryEntry:
        return HistoryEntry(entry.centroids.clone(), entry.assignments.clone(), entry.inertia)

    def __repr__(self) -> str:
        return (f"ClusteringEngine(n_points={self.points_.shape[0]}, "
                f"n_clusters={self.n_clusters}, init={self.init.value!r}, "
                f"n_steps={self.n_steps_}, converged={self.converged_})")
