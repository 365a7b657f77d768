#!/usr/bin/env python3
"""
Demo script showing river network growth on the bundled presets.
"""

from dataclasses import replace

import numpy as np
from py_terrain.core import AleaPRNG, RiverGen
from py_terrain.config import get_preset, list_presets


def grow(preset, seed, settings=None):
    gen = RiverGen(
        AleaPRNG(seed),
        preset.build_slope_map(),
        preset.contour,
        preset.build_graph(),
        settings or preset.settings,
    )
    gen.grow_network()
    return gen.stats, gen.into_graph()


def main():
    """Demonstrate river network generation."""
    print("Py-Terrain River Network Demo")
    print("=" * 40)

    for name in list_presets():
        preset = get_preset(name)
        print(f"\n{name.upper()} preset: {preset.description}")
        print("-" * 30)

        stats, graph = grow(preset, seed=f"{name}_demo")
        elevations = np.array([node.position.z for node in graph.nodes])
        priorities = np.array([node.priority for node in graph.nodes])

        print(f"  Nodes: {len(graph)}")
        print(f"  Edges: {graph.edge_count}")
        print(f"  Growth steps: {stats.steps}")
        print(f"  Dropped children: {stats.dropped_children}")
        print(f"  Elevation range: {elevations.min():.1f}-{elevations.max():.1f}")
        print(f"  Tips: {len(graph.leaves())}")

        print("  Priority distribution:")
        bins = [0, 5, 10, 15, 21]
        hist, _ = np.histogram(priorities, bins=bins)
        for i in range(len(bins) - 1):
            bar = '#' * int(hist[i] / max(hist.max(), 1) * 20)
            print(f"    {bins[i]:3d}-{bins[i+1] - 1:3d}: {bar} ({hist[i]})")

    # Branching mix comparison
    print("\n\nBranching mix on the lake preset:")
    print("-" * 30)
    preset = get_preset("lake")
    mixes = [(1.0, 0.0, 0.0), (0.2, 0.7, 0.1), (0.1, 0.1, 0.8)]
    for growth, symmetric, asymmetric in mixes:
        settings = replace(
            preset.settings,
            prob_growth=growth,
            prob_symmetric=symmetric,
            prob_asymetric=asymmetric,
        )
        _, graph = grow(preset, seed="mix_demo", settings=settings)
        print(f"  growth={growth:.1f} symmetric={symmetric:.1f} asymmetric={asymmetric:.1f}: "
              f"{graph.edge_count} edges, {len(graph.leaves())} tips")


if __name__ == "__main__":
    main()
