"""
K-means++ initialization strategy.

Selects initial centroids using the K-means++ algorithm, which favours
points far from the centroids chosen so far.
"""

from typing import Optional
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy
from ..distances.euclidean import nearest_centroid_distances


class KMeansPlusPlusInit(InitializationStrategy):
    """K-means++ initialization (D² weighting).

    Algorithm:
    1. Choose first centroid uniformly at random (or at ``first_index``)
    2. For each remaining centroid:
       - Compute squared distance from each point to nearest chosen centroid
       - Draw one uniform number r in [0, 1) and take the first point whose
         cumulative probability exceeds r

    When every point coincides with a chosen centroid the weights are all
    zero and the next centroid is drawn uniformly instead.
    """

    def __init__(self, first_index: Optional[int] = None):
        """
        Args:
            first_index: Dataset index of the first centroid. If None, it is
                drawn uniformly at random.
        """
        self.first_index = first_index

    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> Tensor:
        """Initialize centroids using K-means++.

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

        if self.first_index is None:
            first_idx = torch.randint(n_points, (1,), generator=generator).item()
        else:
            if not 0 <= self.first_index < n_points:
                raise ValueError(f"first_index {self.first_index} out of range "
                                 f"for {n_points} points")
            first_idx = self.first_index

        center_indices = [first_idx]

        for _ in range(1, n_clusters):
            weights = nearest_centroid_distances(points, points[center_indices], squared=True)
            center_indices.append(self._sample_index(weights, generator))

        return points[center_indices].clone()

    @staticmethod
    def _sample_index(weights: Tensor, generator: Optional[torch.Generator]) -> int:
        """Map a single uniform draw through the cumulative distribution of weights."""
        total = weights.sum().item()
        if total <= 0.0:
            return torch.randint(weights.shape[0], (1,), generator=generator).item()

        probabilities = weights / total
        cumulative = torch.cumsum(probabilities, dim=0)
        r = torch.rand(1, generator=generator).item()

        above = torch.nonzero(cumulative.cpu() > r)
        if above.numel() > 0:
            return above[0, 0].item()
        # Rounding left the total mass just below r: take the last weighted point
        return torch.nonzero(weights.cpu() > 0)[-1, 0].item()
