"""
Initialization from externally chosen centroids.

Used when the user picks the starting centroids, e.g. by clicking points
on a plot, or to warm-start from a previous run's centroids.
"""

from typing import Optional, Sequence, Union
import numpy as np
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy
from ..base.data_structures import EngineState
from ..utils.validation import validate_centroids


class ManualInit(InitializationStrategy):
    """Initialize from user-supplied centroids, taken verbatim.

    Accepts either:
    - A tensor or numpy array of shape (n_clusters, 2)
    - A sequence of (x, y) pairs or Points
    - An EngineState from a previous run (its current centroids)
    """

    def __init__(self, centroids: Union[Tensor, np.ndarray, Sequence, EngineState]):
        """
        Args:
            centroids: Starting centroids
        """
        self.centroids = centroids

    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> Tensor:
        """Return the supplied centroids after validation.

        Args:
            points: (n, 2) data points (used for dtype and device)
            n_clusters: Expected number of centroids
            generator: Ignored

        Returns:
            (n_clusters, 2) tensor of centroids

        Raises:
            ConfigurationError: If the count differs from n_clusters or the
                points are malformed
        """
        source = self.centroids
        if isinstance(source, EngineState):
            source = source.centroids

        return validate_centroids(source, n_clusters,
                                  dtype=points.dtype, device=points.device)
