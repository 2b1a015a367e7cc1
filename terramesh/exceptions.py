"""Custom exceptions for the TERRAMESH package."""


class TerrameshError(Exception):
    """Base exception for terramesh package."""

    pass


class InvalidParameterError(TerrameshError, ValueError):
    """Resolution, count or radius argument outside its valid domain."""

    pass


class MeshGenerationError(TerrameshError):
    """Mesh generation failed or produced an inconsistent mesh."""

    pass
