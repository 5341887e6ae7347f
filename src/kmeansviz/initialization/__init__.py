"""Initialization strategies for the K-Means engine."""

from .random import RandomInit
from .farthest_first import FarthestFirstInit
from .kmeans_plusplus import KMeansPlusPlusInit
from .manual import ManualInit

__all__ = [
    'RandomInit',
    'FarthestFirstInit',
    'KMeansPlusPlusInit',
    'ManualInit'
]
