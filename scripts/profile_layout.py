"""
Profiling script for PySpringy layout performance analysis.

Repulsion is computed over every pair of nodes, so per-tick cost grows
quadratically with node count. This script measures it.
"""

import cProfile
import pstats
import io
from pstats import SortKey
import time

import numpy as np

from pyspringy import ForceDirected, Graph


def create_graph(n_nodes, n_edges, seed=42):
    """Create a random graph with n nodes and approximately n_edges edges."""
    graph = Graph()
    nodes = [graph.new_node() for _ in range(n_nodes)]

    rng = np.random.default_rng(seed)
    for _ in range(n_edges):
        source = int(rng.integers(0, n_nodes))
        target = int(rng.integers(0, n_nodes))
        if source != target:
            graph.new_edge(nodes[source], nodes[target])

    return graph


def time_ticks(n_nodes, n_edges, ticks=20):
    """Average seconds per tick for a random graph."""
    layout = ForceDirected(create_graph(n_nodes, n_edges), 400.0, 400.0, 0.5, seed=0)
    start = time.perf_counter()
    for _ in range(ticks):
        layout.tick()
    return (time.perf_counter() - start) / ticks


def profile_medium_graph():
    """Profile a medium graph (100 nodes, 200 edges) run to completion."""
    layout = ForceDirected(create_graph(100, 200), 400.0, 400.0, 0.5, seed=0, max_ticks=500)
    layout.start()


def main():
    print("Per-tick cost by graph size")
    print("=" * 40)
    for n in (10, 20, 40, 80, 160):
        per_tick = time_ticks(n, 2 * n)
        print(f"{n:5d} nodes: {per_tick * 1000:8.2f} ms/tick")

    print()
    print("Profile: 100 nodes, 200 edges")
    print("=" * 40)
    profiler = cProfile.Profile()
    profiler.enable()
    profile_medium_graph()
    profiler.disable()

    s = io.StringIO()
    ps = pstats.Stats(profiler, stream=s).sort_stats(SortKey.CUMULATIVE)
    ps.print_stats(15)
    print(s.getvalue())


if __name__ == "__main__":
    main()
