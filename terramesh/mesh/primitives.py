"""Closed-form mesh generators: grid, UV-sphere and torus."""

from __future__ import annotations

import logging
import math
import numbers

import numpy as np

from terramesh.exceptions import InvalidParameterError
from terramesh.mesh.trimesh import TriangleMesh

logger = logging.getLogger(__name__)


def require_int(value, name: str, minimum: int) -> int:
    """Validate an integer count argument.

    Args:
        value: Value to check. Booleans are rejected.
        name: Argument name used in the error message.
        minimum: Smallest accepted value.

    Returns:
        The value as a plain int.

    Raises:
        InvalidParameterError: If value is not an integer or is below minimum.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidParameterError(
            f"{name} must be an integer, got {type(value).__name__}"
        )
    if value < minimum:
        raise InvalidParameterError(f"{name} must be >= {minimum}, got {value}")
    return int(value)


def require_positive_real(value, name: str) -> float:
    """Validate a strictly positive, finite real argument."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidParameterError(
            f"{name} must be a real number, got {type(value).__name__}"
        )
    if not math.isfinite(value) or value <= 0:
        raise InvalidParameterError(f"{name} must be positive, got {value}")
    return float(value)


def _strip_triangles(n_rows: int, n_cols: int) -> np.ndarray:
    """Quad-strip triangulation over a (n_rows + 1) x (n_cols + 1) lattice.

    For every cell (i, j) with v1 = i * (n_cols + 1) + j and
    v2 = v1 + n_cols + 1, emits (v1, v2, v1 + 1) then (v2, v2 + 1, v1 + 1).
    """
    stride = n_cols + 1
    i, j = np.meshgrid(np.arange(n_rows), np.arange(n_cols), indexing="ij")
    v1 = (i * stride + j).ravel()
    v2 = v1 + stride

    first = np.column_stack((v1, v2, v1 + 1))
    second = np.column_stack((v2, v2 + 1, v1 + 1))
    # Interleave so each cell's two triangles stay adjacent
    return np.stack((first, second), axis=1).reshape(-1, 3)


def make_grid(n: int) -> TriangleMesh:
    """Generate a flat n x n grid spanning [-1, 1] x [-1, 1] at z = 0.

    Vertices are stored row-major with ``index = col * n + row``, where
    ``x = row / (n - 1) * 2 - 1`` and ``y = col / (n - 1) * 2 - 1``. Each
    cell with lower-left index i becomes triangles (i, i+1, i+n) and
    (i+n, i+1, i+n+1), both counter-clockwise seen from +z.

    Args:
        n: Number of vertices along each side.

    Returns:
        TriangleMesh with n**2 vertices and 2 * (n - 1)**2 triangles.
        n == 1 yields a single vertex at the origin and n == 0 an empty
        mesh; neither has triangles.

    Raises:
        InvalidParameterError: If n is negative or not an integer.
    """
    n = require_int(n, "n", 0)

    if n < 2:
        logger.warning(f"Grid resolution n={n} is degenerate; no triangles generated.")
        return TriangleMesh(np.zeros((n * n, 3)), np.empty((0, 3)), name="grid")

    idx = np.arange(n * n)
    col, row = np.divmod(idx, n)
    positions = np.zeros((n * n, 3))
    positions[:, 0] = row / (n - 1) * 2 - 1
    positions[:, 1] = col / (n - 1) * 2 - 1

    # Lower-left corner of every cell; skips the last index of each row
    col, row = np.meshgrid(np.arange(n - 1), np.arange(n - 1), indexing="ij")
    i = (col * n + row).ravel()
    first = np.column_stack((i, i + 1, i + n))
    second = np.column_stack((i + n, i + 1, i + n + 1))
    triangles = np.stack((first, second), axis=1).reshape(-1, 3)

    logger.debug(f"Generated grid n={n}: {len(positions)} vertices, {len(triangles)} triangles")
    return TriangleMesh(positions, triangles, name="grid")


def make_uv_sphere(rings: int, slices: int) -> TriangleMesh:
    """Generate a unit UV-sphere.

    Vertex (i, j), for i in 0..rings and j in 0..slices inclusive, has
    polar angle ``i * pi / (rings - 1)`` and azimuth ``j * 2 * pi / slices``.
    The seam column j == slices duplicates j == 0. Triangles span rows
    0..rings-1, so the final vertex row is not referenced by any triangle.

    Args:
        rings: Number of latitude rows; must be >= 2.
        slices: Number of longitude segments; must be >= 3.

    Returns:
        TriangleMesh with (rings + 1) * (slices + 1) vertices and
        2 * (rings - 1) * slices triangles, wound outward.

    Raises:
        InvalidParameterError: If rings < 2 or slices < 3.
    """
    rings = require_int(rings, "rings", 2)
    slices = require_int(slices, "slices", 3)

    polar = np.arange(rings + 1) * np.pi / (rings - 1)
    azimuth = np.arange(slices + 1) * 2 * np.pi / slices
    polar, azimuth = np.meshgrid(polar, azimuth, indexing="ij")

    positions = np.column_stack(
        (
            (np.cos(azimuth) * np.sin(polar)).ravel(),
            (np.sin(azimuth) * np.sin(polar)).ravel(),
            np.cos(polar).ravel(),
        )
    )
    triangles = _strip_triangles(rings - 1, slices)

    logger.debug(
        f"Generated UV-sphere rings={rings}, slices={slices}: "
        f"{len(positions)} vertices, {len(triangles)} triangles"
    )
    return TriangleMesh(positions, triangles, name="uv_sphere")


def make_torus(
    inner_radius: float,
    outer_radius: float,
    rings: int,
    points: int,
) -> TriangleMesh:
    """Generate a torus around the z-axis.

    ``inner_radius`` is the distance from the origin to the centre of the
    tube and ``outer_radius`` is the radius of the tube itself. Vertex
    (i, j), for i in 0..points and j in 0..rings inclusive, has tube angle
    ``a1 = i * 2 * pi / points`` and sweep angle ``a2 = j * 2 * pi / rings``:

        x = (inner + outer * cos(a1)) * cos(a2)
        y = (inner + outer * cos(a1)) * sin(a2)
        z = outer * sin(a1)

    Both seams are duplicated so indexing never wraps. Triangles use the
    same strip pattern as the UV-sphere with stride rings + 1; with this
    winding, face normals point towards the tube's centre circle.

    Args:
        inner_radius: Distance from origin to tube centre; must be positive.
        outer_radius: Tube radius; must be positive.
        rings: Segments around the z-axis; must be >= 3.
        points: Segments around the tube cross-section; must be >= 3.

    Returns:
        TriangleMesh with (points + 1) * (rings + 1) vertices and
        2 * points * rings triangles.

    Raises:
        InvalidParameterError: If any argument is out of range.
    """
    inner_radius = require_positive_real(inner_radius, "inner_radius")
    outer_radius = require_positive_real(outer_radius, "outer_radius")
    rings = require_int(rings, "rings", 3)
    points = require_int(points, "points", 3)

    a1 = np.arange(points + 1) * 2 * np.pi / points
    a2 = np.arange(rings + 1) * 2 * np.pi / rings
    a1, a2 = np.meshgrid(a1, a2, indexing="ij")

    radial = inner_radius + outer_radius * np.cos(a1)
    positions = np.column_stack(
        (
            (radial * np.cos(a2)).ravel(),
            (radial * np.sin(a2)).ravel(),
            (outer_radius * np.sin(a1)).ravel(),
        )
    )
    triangles = _strip_triangles(points, rings)

    logger.debug(
        f"Generated torus rings={rings}, points={points}: "
        f"{len(positions)} vertices, {len(triangles)} triangles"
    )
    return TriangleMesh(positions, triangles, name="torus")
