"""Base classes, data structures and errors for the K-Means engine."""

from .interfaces import (
    InitializationStrategy,
    DistanceMetric,
    AssignmentStrategy,
    ParameterUpdater,
    ConvergenceCriterion,
    ClusteringObjective
)

from .data_structures import (
    Point,
    InitMethod,
    StepOutcome,
    HistoryEntry,
    RunResult,
    EngineState,
    tensor_to_points
)

from .exceptions import (
    KMeansEngineError,
    ConfigurationError,
    SequencingError
)

__all__ = [
    # Interfaces
    'InitializationStrategy',
    'DistanceMetric',
    'AssignmentStrategy',
    'ParameterUpdater',
    'ConvergenceCriterion',
    'ClusteringObjective',

    # Data structures
    'Point',
    'InitMethod',
    'StepOutcome',
    'HistoryEntry',
    'RunResult',
    'EngineState',
    'tensor_to_points',

    # Errors
    'KMeansEngineError',
    'ConfigurationError',
    'SequencingError'
]
