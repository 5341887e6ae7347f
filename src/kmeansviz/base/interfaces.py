"""
Core interfaces for the step-by-step K-Means engine.

This module defines the abstract base classes that the engine's pluggable
components implement, so initialization, assignment, update and convergence
logic can be swapped and tested in isolation.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any
import torch
from torch import Tensor


class InitializationStrategy(ABC):
    """Abstract base class for centroid initialization strategies."""

    @abstractmethod
    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> Tensor:
        """Choose initial centroids.

        Args:
            points: (n, 2) tensor of data points
            n_clusters: Number of centroids to choose
            generator: Optional random source for reproducible draws
            **kwargs: Strategy-specific parameters

        Returns:
            (n_clusters, 2) tensor of centroids
        """
        pass


class DistanceMetric(ABC):
    """Abstract base class for point-to-centroid distance computations."""

    @abstractmethod
    def compute(self, points: Tensor, centroids: Tensor, **kwargs) -> Tensor:
        """Compute distances from every point to every centroid.

        Args:
            points: (n, d) tensor of points
            centroids: (k, d) tensor of centroids

        Returns:
            (n, k) tensor of distances
        """
        pass


class AssignmentStrategy(ABC):
    """Abstract base class for point-to-cluster assignment strategies."""

    @abstractmethod
    def compute_assignments(self, points: Tensor, centroids: Tensor,
                            **kwargs) -> Tensor:
        """Compute cluster assignments for points.

        Args:
            points: (n, d) tensor of data points
            centroids: (k, d) tensor of centroids

        Returns:
            (n,) long tensor of cluster indices
        """
        pass


class ParameterUpdater(ABC):
    """Abstract base class for centroid update strategies."""

    @abstractmethod
    def update(self, points: Tensor, assignments: Tensor, centroids: Tensor,
               generator: Optional[torch.Generator] = None,
               **kwargs) -> Tensor:
        """Compute candidate centroids from the current assignment.

        Args:
            points: (n, d) tensor of all data points
            assignments: (n,) hard assignments
            centroids: (k, d) centroids the assignment was made against
            generator: Optional random source

        Returns:
            (k, d) tensor of candidate centroids (a new tensor)
        """
        pass


class ConvergenceCriterion(ABC):
    """Abstract base class for convergence checking."""

    def __init__(self):
        self.history = []

    @abstractmethod
    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if algorithm has converged.

        Args:
            current_state: Dictionary containing current algorithm state

        Returns:
            True if converged, False otherwise
        """
        pass

    def reset(self):
        """Reset convergence history."""
        self.history = []


class ClusteringObjective(ABC):
    """Abstract base class for clustering objective functions."""

    @abstractmethod
    def compute(self, points: Tensor, centroids: Tensor,
                assignments: Tensor) -> float:
        """Compute objective function value.

        Args:
            points: (n, d) tensor of data points
            centroids: (k, d) tensor of centroids
            assignments: (n,) hard assignments

        Returns:
            Scalar objective value
        """
        pass
