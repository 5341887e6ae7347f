"""
Mean update strategy for centroid-based clustering.
"""

from typing import Optional
import torch
from torch import Tensor

from ..base.interfaces import ParameterUpdater


class MeanUpdater(ParameterUpdater):
    """Moves each centroid to the mean of its assigned points.

    A cluster that received no points is re-seeded at a uniformly random
    dataset point, so the centroid set always holds k finite centroids.
    With an empty dataset there is nothing to re-seed from and the previous
    centroid is kept.
    """

    def update(self, points: Tensor, assignments: Tensor, centroids: Tensor,
               generator: Optional[torch.Generator] = None,
               **kwargs) -> Tensor:
        """Compute candidate centroids.

        Args:
            points: (n, d) tensor of all data points
            assignments: (n,) hard assignments
            centroids: (k, d) centroids the assignment was made against
            generator: Random source for re-seeding empty clusters

        Returns:
            (k, d) tensor of candidate centroids
        """
        n_points = points.shape[0]
        n_clusters = centroids.shape[0]
        new_centroids = centroids.clone()

        for k in range(n_clusters):
            mask = assignments == k
            if mask.any():
                new_centroids[k] = points[mask].mean(dim=0)
            elif n_points > 0:
                idx = torch.randint(n_points, (1,), generator=generator).item()
                new_centroids[k] = points[idx]

        return new_centroids
