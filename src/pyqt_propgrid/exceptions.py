"""Property grid exceptions."""


class PropertyGridError(Exception):
    """Base class for property grid errors."""


class EditorResolutionError(PropertyGridError):
    """Raised when a declared editor override cannot be resolved or instantiated."""


class MetadataError(PropertyGridError):
    """Raised when property or category metadata is inconsistent."""
