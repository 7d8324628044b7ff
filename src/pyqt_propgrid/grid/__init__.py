"""
Grid widgets: value surfaces, row container and the PropertyGrid facade.
"""

from .value_surface import PropertyValueSurface
from .row_container import GridRowContainer
from .property_grid import PropertyGrid, PropertyVisuals

__all__ = [
    "PropertyValueSurface",
    "GridRowContainer",
    "PropertyGrid",
    "PropertyVisuals",
]
