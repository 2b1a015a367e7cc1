"""
Faulted Terrain Demo

This script demonstrates using TERRAMESH to generate the three scenes a
renderer would request: faulted terrain, a UV-sphere and a torus.

Usage:
    python faulted_terrain.py

The script will:
1. Build a 64 x 64 grid and displace it with 200 random faults
2. Estimate smooth vertex normals
3. Build a UV-sphere and a torus from scene options
4. Print mesh statistics and index buffer sizes
"""

import logging

import numpy as np

from terramesh import GeometryBuilder, FaultingConfig, setup_scene
from terramesh.logging_config import setup_logging


def main():
    setup_logging(level=logging.INFO)

    # Terrain parameters
    resolution = 64
    n_faults = 200
    seed = 2024

    print("Building faulted terrain...")
    print(f"  Grid resolution: {resolution}")
    print(f"  Faults: {n_faults}")

    builder = (
        GeometryBuilder("terrain", n=resolution)
        .set_faults(n_faults, config=FaultingConfig.decaying(delta=0.8, scale=0.99))
        .set_random_source(seed)
    )
    terrain = builder.build()

    positions = terrain.positions
    print(f"\nTerrain generated successfully:")
    print(f"  Number of vertices: {terrain.n_vertices}")
    print(f"  Number of triangles: {terrain.n_triangles}")
    print(f"  X range: [{positions[:, 0].min():.2f}, {positions[:, 0].max():.2f}]")
    print(f"  Z range: [{positions[:, 2].min():.2f}, {positions[:, 2].max():.2f}]")
    print(f"  Mean normal z: {np.mean(terrain.normals[:, 2]):.3f}")

    # Other scenes, using the same option names as the viewer UI
    sphere = setup_scene("uv_sphere", {"rings": 32, "slices": 48})
    torus = setup_scene("torus", {"r1": 1.0, "r2": 0.35, "rings": 48, "points": 24})

    for mesh in (terrain, sphere, torus):
        indices = mesh.index_buffer()
        print(f"\n{mesh.name}: {len(indices)} indices ({indices.dtype})")

    return terrain


if __name__ == "__main__":
    main()
