"""Mesh generation utilities."""

from terramesh.mesh.builder import GeometryBuilder, build_geometry, setup_scene
from terramesh.mesh.faulting import (
    FaultingConfig,
    FaultingResult,
    FaultPlane,
    apply_faults,
    fault_terrain,
    random_fault_planes,
)
from terramesh.mesh.normals import add_normals, compute_vertex_normals, face_normals
from terramesh.mesh.primitives import make_grid, make_torus, make_uv_sphere
from terramesh.mesh.trimesh import TriangleMesh

__all__ = [
    "GeometryBuilder",
    "build_geometry",
    "setup_scene",
    "FaultingConfig",
    "FaultingResult",
    "FaultPlane",
    "apply_faults",
    "fault_terrain",
    "random_fault_planes",
    "add_normals",
    "compute_vertex_normals",
    "face_normals",
    "make_grid",
    "make_torus",
    "make_uv_sphere",
    "TriangleMesh",
]
