"""Indexed triangle mesh container and renderer data contract."""

from __future__ import annotations

import numpy as np

from terramesh.exceptions import MeshGenerationError

# Largest vertex index that fits a 16-bit index buffer
_UINT16_MAX = np.iinfo(np.uint16).max


def _as_rows(data, dtype, label: str) -> np.ndarray:
    """Coerce data to a fresh (k, 3) array; empty input becomes (0, 3)."""
    arr = np.array(data, dtype=dtype)
    if arr.size == 0:
        return arr.reshape(0, 3)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise MeshGenerationError(
            f"{label} must have shape (n, 3), got {arr.shape}"
        )
    return arr


class TriangleMesh:
    """Container for an indexed triangle mesh.

    Holds vertex positions, optional per-vertex normals and the triangle
    index list. A vertex's row in ``positions`` is its identity for the
    lifetime of the mesh; rows are never reordered.

    Args:
        positions: Vertex positions, shape (n, 3).
        triangles: Vertex index triples, shape (m, 3). Winding order is
            preserved as given.
        normals: Optional per-vertex normals, shape (n, 3).
        name: Optional name (e.g. "grid", "uv_sphere").

    Raises:
        MeshGenerationError: If shapes are inconsistent or a triangle
            references a vertex that does not exist.
    """

    def __init__(
        self,
        positions: np.ndarray,
        triangles: np.ndarray,
        normals: np.ndarray | None = None,
        name: str | None = None,
    ):
        self.positions = _as_rows(positions, float, "positions")
        self.triangles = _as_rows(triangles, np.int64, "triangles")
        self.name = name
        self._normals: np.ndarray | None = None

        if self.triangles.size:
            lo = self.triangles.min()
            hi = self.triangles.max()
            if lo < 0 or hi >= self.n_vertices:
                raise MeshGenerationError(
                    f"Triangle index out of range [0, {self.n_vertices}): "
                    f"min={lo}, max={hi}"
                )

        if normals is not None:
            self.normals = normals

    @property
    def n_vertices(self) -> int:
        """Number of vertices."""
        return len(self.positions)

    @property
    def n_triangles(self) -> int:
        """Number of triangles."""
        return len(self.triangles)

    @property
    def normals(self) -> np.ndarray | None:
        """Per-vertex normals, or None before normal estimation."""
        return self._normals

    @normals.setter
    def normals(self, value: np.ndarray | None) -> None:
        if value is None:
            self._normals = None
            return
        arr = np.array(value, dtype=float)
        if arr.shape != self.positions.shape:
            raise MeshGenerationError(
                f"normals shape {arr.shape} does not match "
                f"positions shape {self.positions.shape}"
            )
        self._normals = arr

    @property
    def has_normals(self) -> bool:
        """Return True if normals have been computed."""
        return self._normals is not None

    @property
    def bounds(self) -> tuple[np.ndarray, np.ndarray]:
        """Return axis-aligned bounding box as (min_xyz, max_xyz)."""
        if self.n_vertices == 0:
            return np.zeros(3), np.zeros(3)
        return self.positions.min(axis=0), self.positions.max(axis=0)

    def copy(self) -> TriangleMesh:
        """Return a deep copy of the mesh."""
        return TriangleMesh(
            self.positions.copy(),
            self.triangles.copy(),
            normals=None if self._normals is None else self._normals.copy(),
            name=self.name,
        )

    def to_attributes(self) -> dict:
        """Return the mesh as plain nested lists for a renderer.

        Layout::

            {"triangles": [[i0, i1, i2], ...],
             "attributes": {"position": [[x, y, z], ...],
                            "normal": [[nx, ny, nz], ...]}}

        The "normal" attribute is only present once normals exist.
        """
        attributes = {"position": self.positions.tolist()}
        if self._normals is not None:
            attributes["normal"] = self._normals.tolist()
        return {
            "triangles": self.triangles.tolist(),
            "attributes": attributes,
        }

    def vertex_buffer(self, attribute: str = "position") -> np.ndarray:
        """Return a flat float32 array of a vertex attribute.

        Args:
            attribute: "position" or "normal".

        Returns:
            Array of shape (3 * n_vertices,) and dtype float32.

        Raises:
            MeshGenerationError: If normals are requested before they exist.
            ValueError: If the attribute name is unknown.
        """
        if attribute == "position":
            data = self.positions
        elif attribute == "normal":
            if self._normals is None:
                raise MeshGenerationError(
                    "Normals not computed. Call add_normals() first."
                )
            data = self._normals
        else:
            raise ValueError(
                f"Unknown attribute: {attribute}. "
                f"Supported: 'position', 'normal'"
            )
        return data.astype(np.float32).ravel()

    def index_buffer(self) -> np.ndarray:
        """Return a flat index array in the smallest unsigned type that fits.

        uint16 is used when every vertex index fits, otherwise uint32.
        """
        if self.n_vertices - 1 <= _UINT16_MAX:
            dtype = np.uint16
        else:
            dtype = np.uint32
        return self.triangles.astype(dtype).ravel()

    def get_mesh_info(self) -> dict:
        """Return information about the mesh.

        Returns:
            Dictionary with mesh statistics.
        """
        lo, hi = self.bounds
        return {
            "name": self.name,
            "n_vertices": self.n_vertices,
            "n_triangles": self.n_triangles,
            "has_normals": self.has_normals,
            "bounds_min": tuple(float(v) for v in lo),
            "bounds_max": tuple(float(v) for v in hi),
        }

    def __repr__(self) -> str:
        return (
            f"TriangleMesh(name={self.name!r}, n_vertices={self.n_vertices}, "
            f"n_triangles={self.n_triangles}, has_normals={self.has_normals})"
        )
