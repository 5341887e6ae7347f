"""
Input validation utilities.

Provides functions for validating points, centroid sets, cluster counts and
random sources before they reach the engine, including handling of edge
cases, data type conversion, and sanity checks.
"""

from typing import Optional, Union, Sequence
import torch
from torch import Tensor
import numpy as np

from ..base.exceptions import ConfigurationError


def validate_data(X: Union[Tensor, np.ndarray, Sequence],
                  dtype: torch.dtype = torch.float64,
                  device: Optional[torch.device] = None,
                  n_features: int = 2) -> Tensor:
    """Validate and convert input points to an (n, n_features) tensor.

    Args:
        X: Input points (tensor, numpy array, or sequence of pairs)
        dtype: Target data type
        device: Target device
        n_features: Required number of coordinates per point

    Returns:
        Validated tensor

    Raises:
        ConfigurationError: If validation fails
    """
    if isinstance(X, Tensor):
        # Always copy so later changes to X do not leak in
        X = X.detach().to(dtype=dtype, device=device).clone()
    elif isinstance(X, np.ndarray):
        X = torch.from_numpy(np.array(X, dtype=np.float64, copy=True)).to(dtype=dtype, device=device)
    elif isinstance(X, (list, tuple)):
        try:
            X = torch.tensor(X, dtype=dtype, device=device)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Cannot convert points to tensor: {e}") from e
    else:
        raise ConfigurationError(f"Cannot convert {type(X).__name__} to tensor")

    # An empty sequence has no feature axis yet
    if X.numel() == 0 and X.dim() == 1:
        X = X.reshape(0, n_features)

    if X.dim() != 2:
        raise ConfigurationError(f"Expected 2D array of points, got {X.dim()}D")

    found_features = X.shape[1]
    if found_features != n_features:
        raise ConfigurationError(f"Expected points with {n_features} coordinates, "
                                 f"got {found_features}")

    if torch.isnan(X).any():
        raise ConfigurationError("Input contains NaN values")
    if torch.isinf(X).any():
        raise ConfigurationError("Input contains infinite values")

    return X


def validate_centroids(centroids: Union[Tensor, np.ndarray, Sequence],
                       n_clusters: int,
                       dtype: torch.dtype = torch.float64,
                       device: Optional[torch.device] = None) -> Tensor:
    """Validate an externally supplied centroid set.

    Args:
        centroids: Exactly n_clusters points
        n_clusters: Expected number of centroids

    Returns:
        (n_clusters, 2) tensor

    Raises:
        ConfigurationError: If the count or the points are invalid
    """
    C = validate_data(centroids, dtype=dtype, device=device)
    if C.shape[0] != n_clusters:
        raise ConfigurationError(f"Expected {n_clusters} centroids, got {C.shape[0]}")
    return C


def check_n_clusters(n_clusters: int, n_samples: Optional[int] = None) -> None:
    """Validate number of clusters.

    Args:
        n_clusters: Number of clusters
        n_samples: Number of samples, or None when centroids are not drawn
            from the data

    Raises:
        ConfigurationError: If invalid
    """
    if isinstance(n_clusters, bool) or not isinstance(n_clusters, (int, np.integer)):
        raise ConfigurationError(f"n_clusters must be int, got {type(n_clusters).__name__}")

    if n_clusters <= 0:
        raise ConfigurationError(f"n_clusters must be positive, got {n_clusters}")

    if n_samples is not None and n_clusters > n_samples:
        raise ConfigurationError(f"n_clusters ({n_clusters}) cannot be larger than "
                                 f"n_samples ({n_samples})")


def check_random_state(random_state: Optional[Union[int, torch.Generator]]) -> Optional[torch.Generator]:
    """Create generator from random state.

    Args:
        random_state: Seed or generator

    Returns:
        Generator or None (None draws from torch's global RNG)

    Raises:
        ConfigurationError: If random_state is neither None, an int nor a Generator
    """
    if random_state is None:
        return None
    elif isinstance(random_state, torch.Generator):
        return random_state
    elif isinstance(random_state, (int, np.integer)) and not isinstance(random_state, bool):
        generator = torch.Generator()
        generator.manual_seed(int(random_state))
        return generator
    else:
        raise ConfigurationError(f"random_state must be int or Generator, got {type(random_state).__name__}")
