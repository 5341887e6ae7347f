"""
Farthest-first (maximin) initialization strategy.

Spreads initial centroids across the data by greedily taking the point that
lies farthest from every centroid chosen so far.
"""

from typing import Optional
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy
from ..distances.euclidean import nearest_centroid_distances


class FarthestFirstInit(InitializationStrategy):
    """Greedy maximin initialization.

    Algorithm:
    1. Choose the first centroid uniformly at random (or at ``first_index``)
    2. Until k centroids are chosen, add the point whose distance to its
       nearest chosen centroid is largest, the earliest point in dataset
       order winning ties

    Only the first choice is random; the rest is deterministic.
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
        """Initialize centroids with the farthest-first traversal.

        Args:
            points: (n, 2) data points
            n_clusters: Number of clusters
            generator: Random source for the first centroid

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
            min_distances = nearest_centroid_distances(points, points[center_indices])
            # argmax returns the first maximal index
            center_indices.append(torch.argmax(min_distances).item())

        return points[center_indices].clone()
