"""3-vector math helpers."""

from terramesh.geometry.vector import (
    add,
    cross,
    dot,
    normalize,
    normalize_rows,
    sub,
)

__all__ = ["add", "cross", "dot", "normalize", "normalize_rows", "sub"]
