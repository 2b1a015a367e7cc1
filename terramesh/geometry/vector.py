"""Minimal 3-vector operations used by faulting and normal estimation."""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np

VectorLike = Union[Sequence[float], np.ndarray]


def _as_vector(a: VectorLike) -> np.ndarray:
    v = np.asarray(a, dtype=float)
    if v.shape[-1:] != (3,):
        raise ValueError(f"Expected 3-component vector, got shape {v.shape}")
    return v


def sub(a: VectorLike, b: VectorLike) -> np.ndarray:
    """Return a - b."""
    return _as_vector(a) - _as_vector(b)


def add(a: VectorLike, b: VectorLike) -> np.ndarray:
    """Return a + b."""
    return _as_vector(a) + _as_vector(b)


def dot(a: VectorLike, b: VectorLike) -> float:
    """Return the scalar product of two 3-vectors."""
    return float(np.dot(_as_vector(a), _as_vector(b)))


def cross(a: VectorLike, b: VectorLike) -> np.ndarray:
    """Return the cross product a x b."""
    return np.cross(_as_vector(a), _as_vector(b))


def normalize(a: VectorLike) -> np.ndarray:
    """Return a scaled to unit length.

    The zero vector has no direction; it is returned unchanged (as zeros)
    instead of producing NaN.

    Example:
        >>> normalize([3.0, 0.0, 4.0])
        array([0.6, 0. , 0.8])
        >>> normalize([0.0, 0.0, 0.0])
        array([0., 0., 0.])
    """
    v = _as_vector(a)
    length = np.linalg.norm(v)
    if length == 0:
        return np.zeros(3)
    return v / length


def normalize_rows(vectors: np.ndarray) -> np.ndarray:
    """Normalize each row of an (n, 3) array.

    Zero-length rows stay zero.

    Args:
        vectors: Array of shape (n, 3).

    Returns:
        New array of shape (n, 3) with unit-length (or zero) rows.
    """
    v = np.asarray(vectors, dtype=float)
    if v.ndim != 2 or v.shape[1] != 3:
        raise ValueError(f"vectors must have shape (n, 3), got {v.shape}")

    lengths = np.linalg.norm(v, axis=1, keepdims=True)
    safe = np.where(lengths == 0, 1.0, lengths)
    return v / safe
