import numpy as np
import pytest
import torch

from utils import time_block

from kmeansviz import ClusteringEngine, StepOutcome


def _resolved_seed(val, default=1337) -> int:
    return int(val) if isinstance(val, (int, np.integer)) else int(default)


def _finite(x) -> bool:
    arr = x.detach().cpu().numpy() if isinstance(x, torch.Tensor) else np.asarray(x)
    return np.isfinite(arr).all()


def test_k_equals_n_converges_in_one_step(seed_all):
    """Every point is its own cluster; the first step proposes no movement."""
    seed = _resolved_seed(seed_all)
    X = np.random.default_rng(seed).uniform(-5, 5, size=(6, 2))

    engine = ClusteringEngine(X, 6, random_state=seed)
    engine.initialize()

    assert engine.step() is StepOutcome.STOPPED
    assert sorted(engine.assignments.tolist()) == list(range(6))


def test_single_cluster_is_global_mean(seed_all):
    seed = _resolved_seed(seed_all)
    X = np.random.default_rng(seed).normal(size=(50, 2))

    engine = ClusteringEngine(X, 1, init="kmeans++", random_state=seed)
    engine.initialize()
    result = engine.run_full()

    assert result.converged
    assert result.n_steps <= 2
    assert np.allclose(engine.centroids[0].numpy(), X.mean(axis=0), atol=1e-12)
    assert engine.assignments.tolist() == [0] * 50


def test_all_points_identical(seed_all):
    """
    Duplicated points: ties go to centroid 0, centroid 1 is empty and gets
    re-seeded onto the same location, so nothing moves.
    """
    X = [(3.0, 3.0)] * 4
    engine = ClusteringEngine(X, 2, random_state=_resolved_seed(seed_all))
    engine.initialize()

    assert engine.step() is StepOutcome.STOPPED
    assert engine.assignments.tolist() == [0, 0, 0, 0]
    assert engine.centroids.tolist() == [[3.0, 3.0], [3.0, 3.0]]


@pytest.mark.parametrize("init", ["random", "farthest-first", "kmeans++"])
def test_colinear_points(seed_all, rng, init):
    seed = _resolved_seed(seed_all)
    t = rng.normal(size=(200, 1))
    X = np.hstack([t, np.zeros_like(t)])

    engine = ClusteringEngine(X, 3, init=init, random_state=seed)
    engine.initialize()
    with time_block("edges-colinear", meta={"n": 200, "K": 3, "init": init}):
        result = engine.run_full()

    assert result.converged
    assert _finite(engine.centroids)
    assert torch.all(engine.centroids[:, 1] == 0.0)


def test_empty_dataset_in_manual_mode():
    engine = ClusteringEngine([], 2, init="manual")
    engine.set_manual_centroids([(0.0, 0.0), (1.0, 1.0)])

    assert engine.step() is StepOutcome.STOPPED
    assert engine.assignments.shape == (0,)
    assert engine.centroids.tolist() == [[0.0, 0.0], [1.0, 1.0]]
    assert len(engine.history) == 2


def test_manual_more_centroids_than_points():
    X = [(0.0, 0.0), (4.0, 0.0)]
    engine = ClusteringEngine(X, 3, init="manual", random_state=0)
    engine.set_manual_centroids([(0.0, 0.0), (4.0, 0.0), (50.0, 50.0)])

    engine.step()
    assert engine.assignments.tolist() == [0, 1]
    # The empty third cluster jumped onto one of the two points
    assert engine.history[-1].centroids[2].tolist() in [[0.0, 0.0], [4.0, 0.0]]
    assert _finite(engine.centroids)


def test_larger_interactive_dataset(seed_all):
    seed = _resolved_seed(seed_all)
    X = np.random.default_rng(seed).uniform(0, 800, size=(2000, 2))

    engine = ClusteringEngine(X, 8, init="kmeans++", random_state=seed)
    engine.initialize()
    with time_block("edges-2000-points", meta={"n": 2000, "K": 8}):
        result = engine.run_full(max_iter=500)

    assert result.converged
    assert _finite(engine.centroids)
    assert np.isfinite(engine.inertia_)
