"""
Random initialization strategy for the K-Means engine.

Selects random points from the dataset as initial centroids.
"""

from typing import Optional
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy


class RandomInit(InitializationStrategy):
    """Random initialization by selecting points from the dataset.

    Selects n_clusters random points (without replacement) as initial
    centroids, so no dataset point is used twice.
    """

    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> Tensor:
        """Initialize centroids with random points.

        Args:
            points: (n, 2) data points
            n_clusters: Number of clusters
            generator: Optional random source

        Returns:
            (n_clusters, 2) tensor of centroids
        """
        n_points = points.shape[0]

        if n_clusters > n_points:
            raise ValueError(f"Cannot create {n_clusters} clusters from {n_points} points")

        # Select random indices without replacement
        indices = torch.randperm(n_points, generator=generator)[:n_clusters]

        return points[indices.to(points.device)].clone()
