"""
kmeansviz: a step-by-step K-Means clustering engine.

This package implements the clustering core behind an interactive K-Means
visualization: centroid initialization (random, farthest-first, k-means++,
manual), single-step assign/update iterations, convergence detection and a
replayable history of every step.

Example usage:
    >>> from kmeansviz import ClusteringEngine, InitMethod
    >>>
    >>> points = [(0.0, 0.0), (0.1, 0.1), (10.0, 10.0), (10.1, 10.1)]
    >>> engine = ClusteringEngine(points, n_clusters=2,
    ...                           init=InitMethod.KMEANS_PLUS_PLUS,
    ...                           random_state=0)
    >>> engine.initialize()
    >>>
    >>> # Advance one iteration at a time...
    >>> outcome = engine.step()
    >>>
    >>> # ...or run to convergence
    >>> result = engine.run_full()
    >>> engine.centroids
"""

__version__ = '0.1.0'

from .algorithms.engine import ClusteringEngine, KMeansObjective

from .base import (
    Point,
    InitMethod,
    StepOutcome,
    HistoryEntry,
    RunResult,
    EngineState,
    KMeansEngineError,
    ConfigurationError,
    SequencingError
)

__all__ = [
    # Engine
    'ClusteringEngine',
    'KMeansObjective',

    # Core data structures
    'Point',
    'InitMethod',
    'StepOutcome',
    'HistoryEntry',
    'RunResult',
    'EngineState',

    # Errors
    'KMeansEngineError',
    'ConfigurationError',
    'SequencingError',

    # Version
    '__version__'
]
