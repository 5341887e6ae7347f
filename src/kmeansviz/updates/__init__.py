"""Centroid update strategies for the K-Means engine."""

from .mean import MeanUpdater

__all__ = [
    'MeanUpdater'
]
