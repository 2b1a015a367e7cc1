"""Area-weighted per-vertex normal estimation."""

from __future__ import annotations

import logging

import numpy as np

from terramesh.exceptions import InvalidParameterError
from terramesh.geometry.vector import normalize_rows
from terramesh.mesh.trimesh import TriangleMesh

logger = logging.getLogger(__name__)


def face_normals(positions: np.ndarray, triangles: np.ndarray) -> np.ndarray:
    """Compute unnormalized face normals.

    For triangle (i0, i1, i2) the normal is
    ``cross(p[i1] - p[i0], p[i2] - p[i0])``; its length is twice the
    triangle's area and its sign follows the winding order.

    Args:
        positions: Vertex positions, shape (n, 3).
        triangles: Vertex index triples, shape (m, 3).

    Returns:
        Face normals, shape (m, 3).
    """
    positions = np.asarray(positions, dtype=float)
    triangles = np.asarray(triangles, dtype=np.int64).reshape(-1, 3)

    p0 = positions[triangles[:, 0]]
    p1 = positions[triangles[:, 1]]
    p2 = positions[triangles[:, 2]]
    return np.cross(p1 - p0, p2 - p0)


def compute_vertex_normals(
    positions: np.ndarray,
    triangles: np.ndarray,
) -> np.ndarray:
    """Compute smooth per-vertex normals from triangle topology.

    Every triangle adds its unnormalized face normal to each of its three
    vertices, so larger triangles weigh more. The sums are then normalized.

    Vertices whose sum is the zero vector (unreferenced vertices, vertices
    touching only zero-area triangles, or exactly cancelling faces) keep a
    zero normal.

    Args:
        positions: Vertex positions, shape (n, 3).
        triangles: Vertex index triples, shape (m, 3).

    Returns:
        Vertex normals, shape (n, 3).
    """
    positions = np.asarray(positions, dtype=float)
    triangles = np.asarray(triangles, dtype=np.int64).reshape(-1, 3)

    accum = np.zeros((len(positions), 3))
    fn = face_normals(positions, triangles)
    for corner in range(3):
        np.add.at(accum, triangles[:, corner], fn)

    n_degenerate = int(np.count_nonzero(~accum.any(axis=1)))
    if n_degenerate:
        logger.debug(f"{n_degenerate} vertices have no defined normal; left as zero vectors")

    return normalize_rows(accum)


def add_normals(mesh: TriangleMesh) -> TriangleMesh:
    """Attach area-weighted vertex normals to a mesh.

    Replaces any normals the mesh already has.

    Args:
        mesh: Mesh with positions and triangles.

    Returns:
        The same mesh object with ``mesh.normals`` set.

    Raises:
        InvalidParameterError: If mesh is not a TriangleMesh.
    """
    if not isinstance(mesh, TriangleMesh):
        raise InvalidParameterError(
            f"mesh must be a TriangleMesh, got {type(mesh).__name__}"
        )
    mesh.normals = compute_vertex_normals(mesh.positions, mesh.triangles)
    return mesh
