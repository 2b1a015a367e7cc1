import numpy as np
import pytest
from terramesh.exceptions import MeshGenerationError
from terramesh.mesh.trimesh import TriangleMesh


def _triangle():
    positions = [[0, 0, 0], [1, 0, 0], [0, 1, 0]]
    return TriangleMesh(positions, [[0, 1, 2]], name="tri")


def test_counts_and_bounds():
    mesh = _triangle()
    assert mesh.n_vertices == 3
    assert mesh.n_triangles == 1
    lo, hi = mesh.bounds
    assert np.allclose(lo, [0, 0, 0])
    assert np.allclose(hi, [1, 1, 0])
    assert not mesh.has_normals


def test_out_of_range_index_rejected():
    with pytest.raises(MeshGenerationError):
        TriangleMesh([[0, 0, 0], [1, 0, 0]], [[0, 1, 2]])
    with pytest.raises(MeshGenerationError):
        TriangleMesh([[0, 0, 0], [1, 0, 0], [0, 1, 0]], [[-1, 1, 2]])


def test_bad_shapes_rejected():
    with pytest.raises(MeshGenerationError):
        TriangleMesh([[0, 0], [1, 0]], [])
    mesh = _triangle()
    with pytest.raises(MeshGenerationError):
        mesh.normals = np.zeros((2, 3))


def test_empty_mesh():
    mesh = TriangleMesh([], [])
    assert mesh.positions.shape == (0, 3)
    assert mesh.triangles.shape == (0, 3)
    assert mesh.index_buffer().size == 0


def test_to_attributes_layout():
    mesh = _triangle()
    payload = mesh.to_attributes()
    assert payload["triangles"] == [[0, 1, 2]]
    assert set(payload["attributes"]) == {"position"}

    mesh.normals = [[0, 0, 1]] * 3
    payload = mesh.to_attributes()
    assert payload["attributes"]["normal"] == [[0.0, 0.0, 1.0]] * 3


def test_buffers():
    mesh = _triangle()
    buf = mesh.vertex_buffer("position")
    assert buf.dtype == np.float32
    assert buf.shape == (9,)
    idx = mesh.index_buffer()
    assert idx.dtype == np.uint16
    assert list(idx) == [0, 1, 2]

    with pytest.raises(MeshGenerationError):
        mesh.vertex_buffer("normal")
    with pytest.raises(ValueError):
        mesh.vertex_buffer("uv")


def test_index_buffer_widens_for_large_meshes():
    n = 70000
    mesh = TriangleMesh(np.zeros((n, 3)), [[0, 1, n - 1]])
    assert mesh.index_buffer().dtype == np.uint32


def test_copy_is_independent():
    mesh = _triangle()
    dup = mesh.copy()
    dup.positions[0, 2] = 5.0
    assert mesh.positions[0, 2] == 0.0
    assert dup.name == "tri"
