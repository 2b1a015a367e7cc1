"""High-level GeometryBuilder API for renderer-ready meshes."""

from __future__ import annotations

import logging
from typing import Any, Mapping

import numpy as np

from terramesh.exceptions import InvalidParameterError, TerrameshError
from terramesh.mesh.faulting import (
    FaultingConfig,
    FaultingResult,
    apply_faults,
    as_generator,
    random_fault_planes,
)
from terramesh.mesh.normals import add_normals
from terramesh.mesh.primitives import make_grid, make_torus, make_uv_sphere, require_int
from terramesh.mesh.trimesh import TriangleMesh

logger = logging.getLogger(__name__)

# Shape name -> (generator, required parameter names)
_GENERATORS = {
    "grid": (make_grid, ("n",)),
    "terrain": (make_grid, ("n",)),
    "uv_sphere": (make_uv_sphere, ("rings", "slices")),
    "torus": (make_torus, ("inner_radius", "outer_radius", "rings", "points")),
}

# Scene option keys -> builder parameter names
_SCENE_OPTIONS = {
    "terrain": {"resolution": "n"},
    "uv_sphere": {"rings": "rings", "slices": "slices"},
    "torus": {
        "r1": "inner_radius",
        "r2": "outer_radius",
        "rings": "rings",
        "points": "points",
    },
}


class GeometryBuilder:
    """High-level API for building renderer-ready triangle meshes.

    Orchestrates the generation pipeline:
    1. Generate the base mesh (grid, UV-sphere or torus)
    2. Displace heights by random faulting ("terrain" only)
    3. Estimate area-weighted vertex normals

    Args:
        shape: One of "grid", "terrain", "uv_sphere", "torus".
        **params: Generator parameters: ``n`` for grid/terrain,
            ``rings, slices`` for uv_sphere and
            ``inner_radius, outer_radius, rings, points`` for torus.

    Example:
        >>> from terramesh import GeometryBuilder
        >>> mesh = (
        ...     GeometryBuilder("terrain", n=64)
        ...     .set_faults(200)
        ...     .set_random_source(42)
        ...     .build()
        ... )
        >>> payload = mesh.to_attributes()
    """

    def __init__(self, shape: str, **params: Any):
        if shape not in _GENERATORS:
            raise InvalidParameterError(
                f"Unknown shape: {shape}. Supported: {', '.join(_GENERATORS)}"
            )
        _, required = _GENERATORS[shape]
        missing = [name for name in required if name not in params]
        unexpected = [name for name in params if name not in required]
        if missing:
            raise InvalidParameterError(
                f"Missing parameters for {shape}: {', '.join(missing)}"
            )
        if unexpected:
            raise InvalidParameterError(
                f"Unexpected parameters for {shape}: {', '.join(unexpected)}"
            )

        self._shape = shape
        self._params = dict(params)

        # Configuration (set via builder methods)
        self._fault_count: int | None = None
        self._faulting_config = FaultingConfig()
        self._rng: np.random.Generator | int | None = None
        self._compute_normals = True

        # Generated objects (created during build)
        self._mesh: TriangleMesh | None = None
        self._faulting_result: FaultingResult | None = None

    @property
    def shape(self) -> str:
        """Return the shape name."""
        return self._shape

    @property
    def params(self) -> dict:
        """Return a copy of the generator parameters."""
        return dict(self._params)

    @property
    def is_configured(self) -> bool:
        """Return True if all required settings are present."""
        return self._shape != "terrain" or self._fault_count is not None

    def set_faults(
        self,
        fault_count: int,
        config: FaultingConfig | None = None,
    ) -> GeometryBuilder:
        """Set the number of faults applied to a terrain grid.

        Args:
            fault_count: Number of faults; 0 keeps the grid flat.
            config: Displacement settings. Defaults to ``FaultingConfig()``.

        Returns:
            Self for method chaining.
        """
        if self._shape != "terrain":
            raise InvalidParameterError(
                f"Faulting only applies to 'terrain', not '{self._shape}'"
            )
        self._fault_count = require_int(fault_count, "fault_count", 0)
        if config is not None:
            self._faulting_config = config
        return self

    def set_random_source(
        self,
        rng: np.random.Generator | int | None,
    ) -> GeometryBuilder:
        """Set the random source used for fault planes.

        Args:
            rng: numpy Generator, int seed, or None for fresh entropy. With
                an int seed every build() produces the same terrain; a
                Generator is advanced by each build.

        Returns:
            Self for method chaining.
        """
        as_generator(rng)
        self._rng = rng
        return self

    def set_compute_normals(self, enabled: bool = True) -> GeometryBuilder:
        """Enable or disable normal estimation.

        Returns:
            Self for method chaining.
        """
        self._compute_normals = bool(enabled)
        return self

    def _validate_configuration(self) -> None:
        """Validate that all required settings are present."""
        if not self.is_configured:
            raise TerrameshError(
                "Fault count not set. Call set_faults() first."
            )

    def build(self) -> TriangleMesh:
        """Build the mesh.

        Returns:
            TriangleMesh with positions, triangles and (unless disabled)
            normals. Each call generates a fresh mesh.

        Raises:
            TerrameshError: If required settings are missing.
            InvalidParameterError: If generator parameters are out of range.
        """
        self._validate_configuration()

        # Step 1: Generate base mesh
        generator, _ = _GENERATORS[self._shape]
        mesh = generator(**self._params)
        if self._shape == "terrain":
            mesh.name = "terrain"

        # Step 2: Fault terrain
        self._faulting_result = None
        if self._shape == "terrain":
            planes = random_fault_planes(
                self._fault_count, rng=self._rng, extent=self._faulting_config.extent
            )
            self._faulting_result = apply_faults(mesh, planes, self._faulting_config)

        # Step 3: Normals
        if self._compute_normals:
            add_normals(mesh)

        logger.info(
            f"Built {mesh.name}: {mesh.n_vertices} vertices, "
            f"{mesh.n_triangles} triangles"
        )
        self._mesh = mesh
        return mesh

    def get_faulting_result(self) -> FaultingResult | None:
        """Return the faulting summary (available after building terrain)."""
        return self._faulting_result

    def get_mesh_info(self) -> dict:
        """Return information about the builder and the built mesh.

        Returns:
            Dictionary with configuration and mesh statistics.
        """
        info = {"shape": self._shape, **self._params}

        if self._shape == "terrain":
            info["fault_count"] = self._fault_count
            info["fault_delta"] = self._faulting_config.delta
            info["fault_scale"] = self._faulting_config.scale

        if self._mesh is not None:
            info.update(self._mesh.get_mesh_info())

        if self._faulting_result is not None:
            info["height_range"] = self._faulting_result.height_range

        return info


def build_geometry(shape: str, **params: Any) -> TriangleMesh:
    """Convenience function to build a mesh with normals in one call.

    For "terrain", pass ``fault_count`` and optionally ``rng`` and
    ``faulting_config`` alongside ``n``.

    Args:
        shape: One of "grid", "terrain", "uv_sphere", "torus".
        **params: Generator parameters.

    Returns:
        TriangleMesh with normals.
    """
    fault_count = params.pop("fault_count", None)
    rng = params.pop("rng", None)
    faulting_config = params.pop("faulting_config", None)

    builder = GeometryBuilder(shape, **params).set_random_source(rng)
    if shape == "terrain":
        if fault_count is None:
            raise InvalidParameterError("fault_count is required for terrain")
        builder.set_faults(fault_count, config=faulting_config)
    elif fault_count is not None:
        raise InvalidParameterError(
            f"fault_count only applies to 'terrain', not '{shape}'"
        )
    return builder.build()


def setup_scene(
    scene: str,
    options: Mapping[str, Any],
    rng: np.random.Generator | int | None = None,
) -> TriangleMesh:
    """Build the geometry for a named scene from UI-style options.

    Option keys per scene:
        - "terrain": ``resolution`` (grid size) and ``slices`` (fault count)
        - "uv_sphere": ``rings`` and ``slices``
        - "torus": ``r1`` (inner radius), ``r2`` (outer radius),
          ``rings`` and ``points``

    Unrelated options (e.g. shading toggles) are ignored.

    Args:
        scene: Scene name.
        options: Option mapping.
        rng: Random source or seed for terrain faulting.

    Returns:
        TriangleMesh with normals.

    Raises:
        InvalidParameterError: If the scene is unknown or an option is missing.
    """
    if scene not in _SCENE_OPTIONS:
        raise InvalidParameterError(
            f"Unknown scene: {scene}. Supported: {', '.join(_SCENE_OPTIONS)}"
        )

    try:
        params = {
            param: options[key] for key, param in _SCENE_OPTIONS[scene].items()
        }
        if scene == "terrain":
            params["fault_count"] = options["slices"]
    except KeyError as e:
        raise InvalidParameterError(
            f"Missing option {e.args[0]!r} for scene {scene!r}"
        ) from e

    logger.info(f"Setting up scene {scene!r}")
    return build_geometry(scene, rng=rng, **params)
