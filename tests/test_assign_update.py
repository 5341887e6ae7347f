# tests/test_assign_update.py
"""
Assignment and update components, distance helpers and metrics.
"""

from __future__ import annotations

import math

import pytest
import torch

from kmeansviz.assignments import HardAssignment
from kmeansviz.distances import EuclideanDistance, nearest_centroid_distances
from kmeansviz.updates import MeanUpdater
from kmeansviz.utils.metrics import inertia, pairwise_distances, max_centroid_shift


def _t(rows):
    return torch.tensor(rows, dtype=torch.float64)


def test_euclidean_distance_matrix():
    P = _t([(0.0, 0.0), (3.0, 4.0)])
    C = _t([(0.0, 0.0), (0.0, 4.0)])
    D = EuclideanDistance().compute(P, C)
    assert D.shape == (2, 2)
    assert torch.allclose(D, _t([(0.0, 4.0), (5.0, 3.0)]))

    D2 = EuclideanDistance(squared=True).compute(P, C)
    assert torch.allclose(D2, D ** 2)


def test_euclidean_distance_dimension_mismatch():
    with pytest.raises(ValueError):
        EuclideanDistance().compute(torch.zeros(2, 2), torch.zeros(1, 3))


def test_nearest_centroid_distances():
    P = _t([(0.0, 0.0), (10.0, 0.0)])
    C = _t([(1.0, 0.0), (7.0, 0.0)])
    assert nearest_centroid_distances(P, C).tolist() == [1.0, 3.0]
    assert nearest_centroid_distances(P, C, squared=True).tolist() == [1.0, 9.0]


def test_hard_assignment_nearest():
    P = _t([(0.0, 0.0), (9.0, 9.0), (1.0, 2.0)])
    C = _t([(0.0, 0.0), (10.0, 10.0)])
    labels = HardAssignment().compute_assignments(P, C)
    assert labels.dtype == torch.long
    assert labels.tolist() == [0, 1, 0]


def test_hard_assignment_ties_go_to_lowest_index():
    P = _t([(5.0, 5.0)])
    C = _t([(9.0, 5.0), (0.0, 5.0), (10.0, 5.0), (1.0, 5.0)])
    # (9,5) and (1,5) are both at distance 4
    assert HardAssignment().compute_assignments(P, C).tolist() == [0]


def test_hard_assignment_empty_points():
    labels = HardAssignment().compute_assignments(torch.zeros(0, 2), _t([(1.0, 1.0)]))
    assert labels.shape == (0,)


def test_hard_assignment_requires_centroids():
    with pytest.raises(ValueError):
        HardAssignment().compute_assignments(_t([(0.0, 0.0)]), torch.zeros(0, 2))


def test_mean_updater_means():
    P = _t([(0.0, 0.0), (2.0, 0.0), (10.0, 10.0)])
    C = _t([(0.0, 0.0), (9.0, 9.0)])
    A = torch.tensor([0, 0, 1])
    new = MeanUpdater().update(P, A, C)

    assert new.tolist() == [[1.0, 0.0], [10.0, 10.0]]
    assert C.tolist() == [[0.0, 0.0], [9.0, 9.0]], "input centroids must not be mutated"


def test_mean_updater_reseeds_empty_cluster(generator):
    P = _t([(0.0, 0.0), (1.0, 0.0), (2.0, 0.0)])
    C = _t([(1.0, 0.0), (100.0, 100.0)])
    A = torch.tensor([0, 0, 0])

    new = MeanUpdater().update(P, A, C, generator=generator)
    assert new[0].tolist() == [1.0, 0.0]
    assert new[1].tolist() in P.tolist(), "empty cluster must jump to a dataset point"
    assert torch.isfinite(new).all()


def test_mean_updater_empty_dataset_keeps_centroids():
    C = _t([(3.0, 4.0)])
    new = MeanUpdater().update(torch.zeros(0, 2, dtype=torch.float64),
                               torch.zeros(0, dtype=torch.long), C)
    assert torch.equal(new, C)


def test_inertia_and_shift():
    P = _t([(0.0, 0.0), (2.0, 0.0), (10.0, 10.0)])
    C = _t([(1.0, 0.0), (10.0, 10.0)])
    A = torch.tensor([0, 0, 1])
    assert inertia(P, A, C) == pytest.approx(2.0)

    moved = _t([(1.0, 3.0), (14.0, 13.0)])
    assert max_centroid_shift(C, moved) == pytest.approx(5.0)
    assert max_centroid_shift(torch.zeros(0, 2), torch.zeros(0, 2)) == 0.0


def test_pairwise_distances_symmetric():
    P = _t([(0.0, 0.0), (3.0, 4.0), (6.0, 8.0)])
    D = pairwise_distances(P)
    assert torch.allclose(D, D.T)
    assert D[0, 2].item() == pytest.approx(10.0)
    assert D[1, 1].item() == 0.0
    assert math.isclose(pairwise_distances(P[:1], P[1:])[0, 0].item(), 5.0)
