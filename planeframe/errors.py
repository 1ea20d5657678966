# planeframe/errors.py
"""Failure types raised by the frame analysis engine."""


class StructureError(Exception):
    """Base class for every ill-posed model or load set."""
    pass


class InvalidGeometryError(StructureError, ValueError):
    """Zero-length element, bad node reference, duplicate support, bad section."""
    pass


class InvalidLoadReferenceError(StructureError, LookupError):
    """Load pointing at a node or element that does not exist."""
    pass


class UnstableStructureError(StructureError, RuntimeError):
    """Raised when structure is unstable or ill-conditioned."""
    pass


class UnderConstrainedError(UnstableStructureError):
    """Fewer restrained DOFs than needed to remove the planar rigid-body modes."""
    pass


# The kernel has always called this a mechanism.
MechanismError = UnstableStructureError
