"""Distance metrics for clustering algorithms."""

from .euclidean import EuclideanDistance, nearest_centroid_distances

__all__ = [
    'EuclideanDistance',
    'nearest_centroid_distances'
]
