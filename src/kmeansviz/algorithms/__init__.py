"""Clustering engine implementations."""

from .engine import ClusteringEngine, KMeansObjective

__all__ = [
    'ClusteringEngine',
    'KMeansObjective'
]
