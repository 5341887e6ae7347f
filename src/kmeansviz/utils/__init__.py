"""Utility functions for the K-Means engine."""

from .convergence import CentroidShift

from .metrics import (
    pairwise_distances,
    inertia,
    max_centroid_shift
)

from .validation import (
    validate_data,
    validate_centroids,
    check_n_clusters,
    check_random_state
)

__all__ = [
    # Convergence criteria
    'CentroidShift',

    # Metrics
    'pairwise_distances',
    'inertia',
    'max_centroid_shift',

    # Validation
    'validate_data',
    'validate_centroids',
    'check_n_clusters',
    'check_random_state'
]
