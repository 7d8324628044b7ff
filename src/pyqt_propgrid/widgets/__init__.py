"""
Concrete editor widgets.
"""

from .no_scroll import NoScrollSlider, NoScrollChoiceList

__all__ = [
    "NoScrollSlider",
    "NoScrollChoiceList",
]
