"""pytest configuration and fixtures for pyqt-propgrid tests."""

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication  # noqa: E402


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for tests."""
    app = QApplication.instance() or QApplication([])
    yield app
    # Don't quit - may cause issues with other tests


@pytest.fixture(autouse=True)
def default_grid_config():
    """Every test starts from the default grid configuration."""
    from pyqt_propgrid.protocols.grid_config import set_grid_config

    set_grid_config(None)
    yield
    set_grid_config(None)
