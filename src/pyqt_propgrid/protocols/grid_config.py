"""Base configuration class for property grids.

Provides hooks for applications to customize binding and editing behavior.
"""

from typing import Optional
from dataclasses import dataclass


@dataclass
class PropertyGridConfig:
    """Base configuration for property grid behavior.

    Applications can subclass this to provide custom configuration.

    Attributes:
        live_sync: Whether new property models commit every edit immediately
        group_by_category: Whether grids group properties by category
        unspecified_category_name: Bucket for properties without a category (None = "Misc")
        all_category_name: Name of the single category used when grouping is off
        disabled_opacity_ratio: Opacity applied to editors of read-only properties
        default_password_character: Mask used by password editors without an override
    """

    live_sync: bool = False
    group_by_category: bool = False
    unspecified_category_name: Optional[str] = None
    all_category_name: str = "All"
    disabled_opacity_ratio: float = 0.5
    default_password_character: str = "●"
    log_dir: Optional[str] = None
    performance_logger_name: str = "pyqt_propgrid.performance"
    performance_log_filename: str = "performance.log"


# Global config instance (set by application)
_grid_config: Optional[PropertyGridConfig] = None


def set_grid_config(config: Optional[PropertyGridConfig]) -> None:
    """Set the global property grid configuration.

    Args:
        config: PropertyGridConfig instance, or None to restore defaults
    """
    global _grid_config
    _grid_config = config


def get_grid_config() -> PropertyGridConfig:
    """Get the current property grid configuration.

    Returns:
        Current PropertyGridConfig or default if not set
    """
    if _grid_config is None:
        return PropertyGridConfig()
    return _grid_config
