import numpy as np
from terramesh.geometry import vector


def test_basic_operations():
    a = [1.0, 2.0, 3.0]
    b = [4.0, 5.0, 6.0]
    assert np.allclose(vector.add(a, b), [5.0, 7.0, 9.0])
    assert np.allclose(vector.sub(b, a), [3.0, 3.0, 3.0])
    assert vector.dot(a, b) == 32.0


def test_cross_follows_right_hand_rule():
    assert np.allclose(vector.cross([1, 0, 0], [0, 1, 0]), [0, 0, 1])
    assert np.allclose(vector.cross([0, 1, 0], [1, 0, 0]), [0, 0, -1])


def test_normalize_unit_length():
    v = vector.normalize([3.0, 0.0, 4.0])
    assert np.allclose(v, [0.6, 0.0, 0.8])
    assert np.isclose(np.linalg.norm(v), 1.0)


def test_normalize_zero_vector_stays_zero():
    v = vector.normalize([0.0, 0.0, 0.0])
    assert np.all(v == 0.0)
    assert not np.any(np.isnan(v))


def test_normalize_rows_mixed():
    rows = np.array([[0.0, 0.0, 2.0], [0.0, 0.0, 0.0], [1.0, 1.0, 0.0]])
    out = vector.normalize_rows(rows)
    assert np.allclose(out[0], [0, 0, 1])
    assert np.all(out[1] == 0.0)
    assert np.isclose(np.linalg.norm(out[2]), 1.0)
    # input untouched
    assert rows[0, 2] == 2.0
