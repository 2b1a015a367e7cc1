"""Terrain generation by iterative random faulting of a height field."""

from __future__ import annotations

import logging
import math
from typing import Iterable, Iterator, NamedTuple

import numpy as np

from terramesh.exceptions import InvalidParameterError
from terramesh.mesh.primitives import require_int, require_positive_real
from terramesh.mesh.trimesh import TriangleMesh

logger = logging.getLogger(__name__)

DEFAULT_FAULT_DELTA = 0.8
DEFAULT_FAULT_SCALE = 1.0


class FaultingConfig:
    """Configuration for fault displacement.

    Args:
        delta: Height change applied on each side of the first fault plane.
        scale: Factor applied to ``delta`` after every fault. 1.0 keeps the
            displacement constant; values below 1 make later faults smaller.
        extent: Fault points are drawn from [-extent, extent]^2. The default
            matches the [-1, 1] span of ``make_grid``.

    Example:
        >>> config = FaultingConfig.decaying(delta=0.8, scale=0.5)
        >>> config.delta_at(2)
        0.2
    """

    def __init__(
        self,
        delta: float = DEFAULT_FAULT_DELTA,
        scale: float = DEFAULT_FAULT_SCALE,
        extent: float = 1.0,
    ):
        self._delta = require_positive_real(delta, "delta")
        self._scale = require_positive_real(scale, "scale")
        self._extent = require_positive_real(extent, "extent")
        if self._scale > 1:
            raise InvalidParameterError(f"scale must be in (0, 1], got {scale}")

    @classmethod
    def constant(cls, delta: float = DEFAULT_FAULT_DELTA) -> FaultingConfig:
        """Create configuration where every fault displaces by ``delta``."""
        return cls(delta=delta, scale=1.0)

    @classmethod
    def decaying(cls, delta: float, scale: float) -> FaultingConfig:
        """Create configuration with geometrically shrinking displacement.

        Fault k (0-indexed) displaces by ``delta * scale**k``.
        """
        return cls(delta=delta, scale=scale)

    @property
    def delta(self) -> float:
        """Initial displacement."""
        return self._delta

    @property
    def scale(self) -> float:
        """Per-fault decay factor."""
        return self._scale

    @property
    def extent(self) -> float:
        """Half-width of the square fault points are drawn from."""
        return self._extent

    @property
    def is_decaying(self) -> bool:
        """Return True if displacement shrinks between faults."""
        return self._scale != 1.0

    def delta_at(self, k: int) -> float:
        """Displacement used by fault k (0-indexed)."""
        return self._delta * self._scale**k

    def __repr__(self) -> str:
        return (
            f"FaultingConfig(delta={self._delta}, scale={self._scale}, "
            f"extent={self._extent})"
        )


class FaultPlane(NamedTuple):
    """Vertical plane through ``point`` with normal (cos theta, sin theta, 0)."""

    point: tuple[float, float]
    theta: float

    @property
    def normal(self) -> np.ndarray:
        return np.array([math.cos(self.theta), math.sin(self.theta), 0.0])


class FaultingResult(NamedTuple):
    """Summary of a faulting run."""

    mesh: TriangleMesh
    n_faults: int
    x_range: tuple[float, float]
    z_range_raw: tuple[float, float]
    height_range: tuple[float, float]


def as_generator(rng: np.random.Generator | int | None = None) -> np.random.Generator:
    """Return a numpy Generator from a Generator, an int seed or None."""
    if isinstance(rng, np.random.Generator):
        return rng
    if rng is None or isinstance(rng, (int, np.integer)):
        return np.random.default_rng(rng)
    raise InvalidParameterError(
        f"rng must be a numpy Generator, an int seed or None, got {type(rng).__name__}"
    )


def random_fault_planes(
    fault_count: int,
    rng: np.random.Generator | int | None = None,
    extent: float = 1.0,
) -> Iterator[FaultPlane]:
    """Draw fault planes uniformly at random.

    Args:
        fault_count: Number of planes to draw.
        rng: Random source or seed. Equal seeds give equal plane sequences.
        extent: Points are drawn uniformly from [-extent, extent]^2.

    Yields:
        FaultPlane with uniform point and angle theta in [0, 2*pi).
    """
    fault_count = require_int(fault_count, "fault_count", 0)
    gen = as_generator(rng)
    for _ in range(fault_count):
        x, y = gen.uniform(-extent, extent, size=2)
        theta = gen.uniform(0.0, 2 * math.pi)
        yield FaultPlane((float(x), float(y)), float(theta))


def apply_faults(
    mesh: TriangleMesh,
    planes: Iterable[FaultPlane],
    config: FaultingConfig | None = None,
) -> FaultingResult:
    """Displace mesh heights by a sequence of fault planes, then rescale.

    For each plane, vertices with ``dot(pos - p, n) < 0`` are lowered by the
    current displacement and all others raised by it; the displacement is
    then multiplied by ``config.scale``. Minimum and maximum of x and z are
    tracked over every iteration.

    Afterwards, with ``h = (xmax - xmin) / 2``, heights are mapped linearly
    onto [-h, h] so that the vertical extent equals the horizontal extent
    regardless of fault count or displacement. With h == 0 the heights are
    left as accumulated.

    The mesh is modified in place; only the z column changes.

    Args:
        mesh: Mesh to displace, normally from ``make_grid``.
        planes: Fault planes in application order.
        config: Displacement settings. Defaults to ``FaultingConfig()``.

    Returns:
        FaultingResult describing the run; ``result.mesh is mesh``.
    """
    if not isinstance(mesh, TriangleMesh):
        raise InvalidParameterError(
            f"mesh must be a TriangleMesh, got {type(mesh).__name__}"
        )
    config = config or FaultingConfig()
    points, normals = _plane_arrays(list(planes))
    n_faults = len(points)

    positions = mesh.positions
    xy = positions[:, :2]
    x = positions[:, 0]
    z = positions[:, 2]

    if not n_faults or mesh.n_vertices == 0:
        z_range = (float(z.min()), float(z.max())) if len(z) else (0.0, 0.0)
        return FaultingResult(mesh, n_faults, (0.0, 0.0), z_range, z_range)

    # Running extrema start at 0, so the origin is always inside the range
    xmin = xmax = zmin = zmax = 0.0
    delta = config.delta

    for point, normal in zip(points, normals):
        side = (xy - point) @ normal
        z += np.where(side < 0, -delta, delta)

        xmin = min(xmin, float(x.min()))
        xmax = max(xmax, float(x.max()))
        zmin = min(zmin, float(z.min()))
        zmax = max(zmax, float(z.max()))

        delta *= config.scale

    z_range_raw = (zmin, zmax)
    h = (xmax - xmin) / 2

    if h != 0:
        _rescale_heights(z, h)
    else:
        logger.warning("Horizontal extent is zero; skipping height rescale.")

    height_range = (float(z.min()), float(z.max()))
    logger.info(
        f"Applied {n_faults} faults: raw z range [{zmin:.3f}, {zmax:.3f}], "
        f"rescaled to [{height_range[0]:.3f}, {height_range[1]:.3f}]"
    )
    return FaultingResult(mesh, n_faults, (xmin, xmax), z_range_raw, height_range)


def _plane_arrays(planes: list[FaultPlane]) -> tuple[np.ndarray, np.ndarray]:
    """Stack plane points and in-plane normals into (k, 2) arrays.

    Raises:
        InvalidParameterError: If any plane is malformed.
    """
    if not planes:
        return np.empty((0, 2)), np.empty((0, 2))
    try:
        points = np.array([p.point for p in planes], dtype=float)
        normals = np.array([p.normal[:2] for p in planes], dtype=float)
    except (AttributeError, TypeError, ValueError) as e:
        raise InvalidParameterError(f"Malformed fault plane: {e}") from e

    if points.shape != (len(planes), 2) or normals.shape != (len(planes), 2):
        raise InvalidParameterError(
            "Every fault plane needs a 2D point and a scalar theta"
        )
    if not (np.all(np.isfinite(points)) and np.all(np.isfinite(normals))):
        raise InvalidParameterError("Fault planes must have finite points and angles")
    return points, normals


def _rescale_heights(z: np.ndarray, h: float) -> None:
    """Map z linearly onto [-h, h] in place."""
    lo = float(z.min())
    hi = float(z.max())
    if hi == lo:
        logger.warning("Faulted heights are flat; setting all heights to 0.")
        z[:] = 0.0
        return
    z[:] = (z - lo) / (hi - lo) * (2 * h) - h


def fault_terrain(
    mesh: TriangleMesh,
    fault_count: int,
    rng: np.random.Generator | int | None = None,
    config: FaultingConfig | None = None,
) -> TriangleMesh:
    """Generate terrain by faulting a grid mesh in place.

    Args:
        mesh: Grid mesh from ``make_grid``.
        fault_count: Number of random faults; 0 leaves the mesh unchanged.
        rng: Random source or seed for fault points and angles.
        config: Displacement settings. Defaults to ``FaultingConfig()``.

    Returns:
        The same mesh object, with displaced z-coordinates.

    Raises:
        InvalidParameterError: If fault_count is negative or not an integer,
            or mesh is not a TriangleMesh. Nothing is modified in that case.

    Example:
        >>> grid = make_grid(64)
        >>> terrain = fault_terrain(grid, 200, rng=42)
    """
    fault_count = require_int(fault_count, "fault_count", 0)
    if not isinstance(mesh, TriangleMesh):
        raise InvalidParameterError(
            f"mesh must be a TriangleMesh, got {type(mesh).__name__}"
        )
    config = config or FaultingConfig()

    planes = random_fault_planes(fault_count, rng=rng, extent=config.extent)
    return apply_faults(mesh, planes, config).mesh
