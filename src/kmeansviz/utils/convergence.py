"""
Convergence criteria for the K-Means engine.

The engine stops when no centroid would move further than a fixed tolerance.
Centroids are compared strictly by index: centroid i before the update is
paired with centroid i after it, with no attempt to re-match clusters. A
relabeling between iterations would therefore be reported as movement.
"""

from typing import Dict, Any
import math
import torch

from ..base.interfaces import ConvergenceCriterion


class CentroidShift(ConvergenceCriterion):
    """Convergence when every centroid's proposed move is within tolerance."""

    def __init__(self, tol: float = 1e-4):
        """
        Args:
            tol: Maximum Euclidean distance a centroid may move and still
                count as stationary (inclusive)
        """
        super().__init__()
        if not math.isfinite(tol) or tol < 0:
            raise ValueError(f"tol must be finite and non-negative, got {tol}")
        self.tol = tol

    def check(self, current_state: Dict[str, Any]) -> bool:
        """Compare current centroids with candidate centroids index by index.

        Expects ``current_state['centroids']`` and
        ``current_state['candidates']``, both (k, d) tensors.
        """
        current = current_state['centroids']
        candidates = current_state['candidates']

        if current.shape != candidates.shape:
            raise ValueError(f"Centroid shape mismatch: {tuple(current.shape)} vs "
                             f"{tuple(candidates.shape)}")

        shifts = torch.norm(candidates - current, dim=1)
        max_shift = shifts.max().item() if shifts.numel() > 0 else 0.0
        converged = bool((shifts <= self.tol).all().item())

        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'max_shift': max_shift,
            'converged': converged
        })

        return converged
