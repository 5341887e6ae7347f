"""
Clustering evaluation metrics.

Internal quality measures used to annotate the engine's step history.
"""

from typing import Optional
import torch
from torch import Tensor

from ..distances.euclidean import EuclideanDistance


def pairwise_distances(X: Tensor, Y: Optional[Tensor] = None) -> Tensor:
    """Compute pairwise Euclidean distances between points.

    Args:
        X: (n, d) first set of points
        Y: (m, d) second set of points (if None, uses X)

    Returns:
        (n, m) distance matrix
    """
    if Y is None:
        Y = X
    return EuclideanDistance().compute(X, Y)


def inertia(X: Tensor, labels: Tensor, centers: Tensor) -> float:
    """Compute sum of squared distances to assigned centers (inertia).

    Args:
        X: (n, d) data points
        labels: (n,) cluster labels
        centers: (k, d) cluster centers

    Returns:
        Total inertia (lower is better)
    """
    total = 0.0
    n_clusters = centers.shape[0]

    for k in range(n_clusters):
        mask = labels == k
        if mask.sum() > 0:
            cluster_points = X[mask]
            distances = torch.sum((cluster_points - centers[k]) ** 2, dim=1)
            total += distances.sum().item()

    return total


def max_centroid_shift(old: Tensor, new: Tensor) -> float:
    """Largest index-paired Euclidean distance between two centroid sets."""
    if old.shape[0] == 0:
        return 0.0
    return torch.norm(new - old, dim=1).max().item()
