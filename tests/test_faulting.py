import math

import numpy as np
import pytest
from terramesh.exceptions import InvalidParameterError
from terramesh.mesh.faulting import (
    FaultingConfig,
    FaultPlane,
    apply_faults,
    fault_terrain,
    random_fault_planes,
)
from terramesh.mesh.primitives import make_grid, make_uv_sphere


def test_zero_faults_leave_grid_flat():
    grid = make_grid(5)
    out = fault_terrain(grid, 0, rng=1)
    assert out is grid
    assert np.all(out.positions[:, 2] == 0.0)


def test_only_heights_change():
    grid = make_grid(8)
    xy_before = grid.positions[:, :2].copy()
    fault_terrain(grid, 25, rng=3)
    assert np.array_equal(grid.positions[:, :2], xy_before)
    assert np.any(grid.positions[:, 2] != 0.0)


@pytest.mark.parametrize("faults", [1, 5, 50, 300])
def test_vertical_extent_matches_horizontal(faults):
    grid = make_grid(16)
    fault_terrain(grid, faults, rng=faults)
    x = grid.positions[:, 0]
    z = grid.positions[:, 2]
    assert math.isclose(z.max() - z.min(), x.max() - x.min(), rel_tol=1e-9)
    assert math.isclose(z.max(), 1.0, rel_tol=1e-9)
    assert math.isclose(z.min(), -1.0, rel_tol=1e-9)


def test_extent_independent_of_delta():
    a = make_grid(10)
    b = make_grid(10)
    fault_terrain(a, 40, rng=7, config=FaultingConfig(delta=0.1))
    fault_terrain(b, 40, rng=7, config=FaultingConfig(delta=5.0))
    # same planes, heights differ only by the linear rescale
    assert np.allclose(a.positions[:, 2], b.positions[:, 2])


def test_same_seed_is_bit_identical():
    a = fault_terrain(make_grid(12), 30, rng=123)
    b = fault_terrain(make_grid(12), 30, rng=123)
    assert np.array_equal(a.positions, b.positions)


def test_same_planes_are_bit_identical():
    planes = [FaultPlane((0.1, -0.2), 0.3), FaultPlane((-0.5, 0.4), 2.0), FaultPlane((0.0, 0.0), 4.5)]
    a = make_grid(9)
    b = make_grid(9)
    apply_faults(a, planes)
    apply_faults(b, iter(planes))
    assert np.array_equal(a.positions, b.positions)


def test_single_plane_splits_grid():
    # plane through origin with normal +x: right half raised, left half lowered
    grid = make_grid(4)
    result = apply_faults(grid, [FaultPlane((0.0, 0.0), 0.0)])
    x = grid.positions[:, 0]
    z = grid.positions[:, 2]
    assert np.all(z[x > 0] == z.max())
    assert np.all(z[x < 0] == z.min())
    assert result.n_faults == 1
    assert result.z_range_raw == (-0.8, 0.8)
    assert result.x_range == (-1.0, 1.0)
    assert result.height_range == (-1.0, 1.0)


def test_vertex_on_plane_is_raised():
    grid = make_grid(3)
    # vertical line x == 0 passes through the middle column
    apply_faults(grid, [FaultPlane((0.0, 0.0), 0.0)], FaultingConfig(delta=1.0))
    x = grid.positions[:, 0]
    z = grid.positions[:, 2]
    assert np.all(z[x == 0.0] == z.max())


def test_flat_result_is_zeroed():
    # every vertex on the positive side of both planes
    grid = make_grid(3)
    planes = [FaultPlane((-5.0, 0.0), 0.0), FaultPlane((-5.0, 0.0), 0.0)]
    apply_faults(grid, planes)
    assert np.all(grid.positions[:, 2] == 0.0)


def test_single_vertex_grid_skips_rescale():
    grid = make_grid(1)
    planes = [FaultPlane((0.5, 0.5), math.pi)]
    apply_faults(grid, planes, FaultingConfig(delta=0.8))
    # h == 0, accumulated height kept
    assert grid.positions[0, 2] == pytest.approx(0.8)


def test_decay_reduces_later_faults():
    planes = [FaultPlane((0.0, 0.0), 0.0), FaultPlane((0.0, 0.0), math.pi / 2)]
    grid = make_grid(2)
    result = apply_faults(grid, planes, FaultingConfig.decaying(delta=1.0, scale=0.5))
    # vertices see +/-1 then +/-0.5, giving four distinct raw heights
    assert result.z_range_raw == (-1.5, 1.5)
    assert len(np.unique(grid.positions[:, 2])) == 4


def test_constant_config_matches_default():
    assert FaultingConfig.constant().delta == 0.8
    assert FaultingConfig().scale == 1.0
    assert not FaultingConfig().is_decaying
    assert FaultingConfig.decaying(1.0, 0.5).delta_at(3) == 0.125


@pytest.mark.parametrize(
    "kwargs",
    [
        {"delta": 0.0},
        {"delta": -1.0},
        {"delta": "0.8"},
        {"delta": True},
        {"delta": float("inf")},
        {"scale": 0.0},
        {"scale": 1.5},
        {"scale": "1"},
        {"extent": 0.0},
        {"extent": None},
    ],
)
def test_config_rejects_invalid(kwargs):
    with pytest.raises(InvalidParameterError):
        FaultingConfig(**kwargs)


@pytest.mark.parametrize(
    "bad_plane",
    [
        FaultPlane((0.0, 0.0, 0.0), 1.0),
        FaultPlane((0.0,), 1.0),
        FaultPlane((0.0, 0.0), "north"),
        FaultPlane((0.0, float("nan")), 1.0),
        (0.0, 0.0),
    ],
)
def test_malformed_plane_rejected_before_mutation(bad_plane):
    grid = make_grid(4)
    before = grid.positions.copy()
    planes = [FaultPlane((0.0, 0.0), 0.0), bad_plane]
    with pytest.raises(InvalidParameterError):
        apply_faults(grid, planes)
    assert np.array_equal(grid.positions, before)


def test_empty_mesh_reports_consumed_planes():
    grid = make_grid(0)
    planes = [FaultPlane((0.0, 0.0), 0.0), FaultPlane((0.1, 0.2), 1.0)]
    result = apply_faults(grid, planes)
    assert result.n_faults == 2
    assert result.mesh.n_vertices == 0


@pytest.mark.parametrize("bad", [-1, 2.5, None])
def test_invalid_fault_count_does_not_mutate(bad):
    grid = make_grid(4)
    before = grid.positions.copy()
    with pytest.raises(InvalidParameterError):
        fault_terrain(grid, bad, rng=0)
    assert np.array_equal(grid.positions, before)


def test_fault_terrain_rejects_non_mesh():
    with pytest.raises(InvalidParameterError):
        fault_terrain(np.zeros((4, 3)), 3)


def test_random_planes_within_extent():
    planes = list(random_fault_planes(200, rng=np.random.default_rng(5), extent=2.0))
    assert len(planes) == 200
    pts = np.array([p.point for p in planes])
    thetas = np.array([p.theta for p in planes])
    assert np.all(np.abs(pts) <= 2.0)
    assert np.all((thetas >= 0) & (thetas < 2 * math.pi))
    assert np.allclose(np.linalg.norm([p.normal for p in planes], axis=1), 1.0)


def test_random_planes_rejects_bad_rng():
    with pytest.raises(InvalidParameterError):
        list(random_fault_planes(3, rng="seed"))


def test_faulting_works_on_any_mesh():
    sphere = make_uv_sphere(6, 6)
    xy_before = sphere.positions[:, :2].copy()
    fault_terrain(sphere, 10, rng=9)
    assert np.array_equal(sphere.positions[:, :2], xy_before)
