"""
Hard assignment strategy for the K-Means engine.

Assigns each point to its nearest centroid based on Euclidean distance.
"""

from typing import Optional
import torch
from torch import Tensor

from ..base.interfaces import AssignmentStrategy, DistanceMetric
from ..distances.euclidean import EuclideanDistance


class HardAssignment(AssignmentStrategy):
    """Hard (discrete) assignment to nearest centroid.

    Each point is assigned to exactly one cluster based on minimum distance.
    When several centroids are equally near, the lowest index wins
    (``torch.argmin`` returns the first minimal value).
    """

    def __init__(self, metric: Optional[DistanceMetric] = None):
        """
        Args:
            metric: Distance metric, Euclidean by default
        """
        super().__init__()
        self.metric = metric if metric is not None else EuclideanDistance()

    def compute_assignments(self, points: Tensor, centroids: Tensor,
                            **kwargs) -> Tensor:
        """Assign each point to nearest centroid.

        Args:
            points: (n, d) data points
            centroids: (k, d) centroids, k >= 1

        Returns:
            (n,) long tensor of cluster indices
        """
        if centroids.shape[0] == 0:
            raise ValueError("Cannot assign points without centroids")

        n_points = points.shape[0]
        if n_points == 0:
            return torch.empty(0, dtype=torch.long, device=points.device)

        distances = self.metric.compute(points, centroids)
        return torch.argmin(distances, dim=1)
