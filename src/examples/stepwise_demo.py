"""
Demo of the step-by-step K-Means engine.

This example shows how a presentation layer drives the engine:
1. Generate a 2-D point set
2. Initialize centroids with each method
3. Advance one step at a time, reading back the state after each call
4. Replay the recorded history
"""

import torch

# Add parent directory to path for imports
import sys
sys.path.append('..')

from kmeansviz import ClusteringEngine, InitMethod


def generate_blob_data(n_points_per_cluster=60, n_clusters=3, spread=0.8):
    """Generate blobs of points around centers spread over a 10x10 square."""
    torch.manual_seed(42)

    centers = torch.rand(n_clusters, 2) * 10
    data_list = []
    for k in range(n_clusters):
        points = centers[k].unsqueeze(0) + torch.randn(n_points_per_cluster, 2) * spread
        data_list.append(points)

    return torch.cat(data_list, dim=0)


def describe(engine):
    """One line per centroid, as a redraw callback would consume them."""
    counts = torch.bincount(engine.assignments, minlength=engine.n_clusters) \
        if engine.assignments.numel() else torch.zeros(engine.n_clusters, dtype=torch.long)
    for i, (x, y) in enumerate(engine.centroids.tolist()):
        print(f"    centroid {i}: ({x:7.3f}, {y:7.3f})  points={counts[i].item()}")


def main():
    X = generate_blob_data()
    print(f"Dataset: {X.shape[0]} points")

    for method in (InitMethod.RANDOM, InitMethod.FARTHEST_FIRST, InitMethod.KMEANS_PLUS_PLUS):
        print(f"\n=== {method.value} ===")
        engine = ClusteringEngine(X, 3, init=method, random_state=0)
        engine.initialize()
        print("  initial centroids")
        describe(engine)

        while True:
            outcome = engine.step()
            print(f"  step {engine.n_steps_}: {outcome.value} "
                  f"(inertia {engine.inertia_:.3f})")
            describe(engine)
            if outcome.converged:
                break

    # Manual mode: centroids picked by the user, e.g. by clicking on the plot
    print("\n=== manual ===")
    engine = ClusteringEngine(X, 3, init="manual", max_iter=50)
    engine.set_manual_centroids([(0.0, 0.0), (5.0, 5.0), (10.0, 10.0)])
    result = engine.run_full()
    print(f"  converged={result.converged} after {result.n_steps} steps")

    print("  replay:")
    for i in range(len(engine.history)):
        entry = engine.replay(i)
        label = "init" if entry.is_initial else f"step {i}"
        points = ", ".join(f"({p.x:.2f}, {p.y:.2f})" for p in entry.centroid_points())
        print(f"    {label:>7}: {points}")


if __name__ == "__main__":
    main()
