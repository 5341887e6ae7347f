"""
Euclidean distance metric for clustering.

The metric K-Means assigns points with and measures centroid movement with.
"""

import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric


class EuclideanDistance(DistanceMetric):
    """Euclidean distance from every point to every centroid.

    Computes ||x - μ|| directly from coordinate differences rather than the
    ||x||² + ||μ||² - 2<x,μ> expansion, so equal distances compare equal and
    tie-breaking stays exact.
    """

    def __init__(self, squared: bool = False):
        """
        Args:
            squared: If True, return squared distances.
                    If False (default), return actual Euclidean distances.
        """
        self.squared = squared

    def compute(self, points: Tensor, centroids: Tensor, **kwargs) -> Tensor:
        """Compute Euclidean distances from points to centroids.

        Args:
            points: (n, d) tensor of points
            centroids: (k, d) tensor of centroids

        Returns:
            (n, k) tensor of distances
        """
        if points.shape[-1] != centroids.shape[-1]:
            raise ValueError(f"Dimension mismatch: points have {points.shape[-1]}, "
                             f"centroids have {centroids.shape[-1]}")

        diff = points.unsqueeze(1) - centroids.unsqueeze(0)
        squared_distances = torch.sum(diff * diff, dim=2)

        if self.squared:
            return squared_distances
        else:
            return torch.sqrt(squared_distances)


def nearest_centroid_distances(points: Tensor, centroids: Tensor,
                               squared: bool = False) -> Tensor:
    """Distance from each point to its nearest centroid.

    Args:
        points: (n, d) tensor of points
        centroids: (m, d) tensor of already chosen centroids, m >= 1

    Returns:
        (n,) tensor of minimum distances
    """
    distances = EuclideanDistance(squared=squared).compute(points, centroids)
    return distances.min(dim=1).values
