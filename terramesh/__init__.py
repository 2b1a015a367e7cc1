"""TERRAMESH - procedural triangle meshes and faulted terrain.

Generates indexed triangle meshes (grid, UV-sphere, torus), displaces grids
into terrain by random faulting, and estimates smooth vertex normals. The
result is plain in-memory geometry for a renderer to upload.

Example:
    >>> from terramesh import GeometryBuilder
    >>> mesh = (
    ...     GeometryBuilder("terrain", n=64)
    ...     .set_faults(200)
    ...     .set_random_source(42)
    ...     .build()
    ... )
    >>> payload = mesh.to_attributes()
    >>> indices = mesh.index_buffer()
"""

from terramesh.exceptions import (
    InvalidParameterError,
    MeshGenerationError,
    TerrameshError,
)
from terramesh.mesh import (
    FaultingConfig,
    GeometryBuilder,
    TriangleMesh,
    add_normals,
    build_geometry,
    fault_terrain,
    make_grid,
    make_torus,
    make_uv_sphere,
    setup_scene,
)

__version__ = "0.1.0"

__all__ = [
    # Main API
    "GeometryBuilder",
    "TriangleMesh",
    "FaultingConfig",
    "build_geometry",
    "setup_scene",
    # Pipeline steps
    "make_grid",
    "make_uv_sphere",
    "make_torus",
    "fault_terrain",
    "add_normals",
    # Exceptions
    "TerrameshError",
    "InvalidParameterError",
    "MeshGenerationError",
]
