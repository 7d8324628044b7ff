"""
QGridLayout implementation of the RowContainer contract.
"""

import logging
from typing import List, Optional, Tuple

from PyQt6.QtWidgets import QGridLayout, QWidget

from pyqt_propgrid.protocols.layout_protocols import RowContainer
from pyqt_propgrid.protocols.widget_adapters import PyQtWidgetMeta

logger = logging.getLogger(__name__)


class GridRowContainer(QGridLayout, RowContainer, metaclass=PyQtWidgetMeta):
    """Two-column grid: names on the left, value cells stretched on the right."""

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._rows: List[Tuple[QWidget, ...]] = []
        self.setColumnStretch(0, 0)
        self.setColumnStretch(1, 1)
        self.setContentsMargins(4, 4, 4, 4)
        self.setHorizontalSpacing(8)
        self.setVerticalSpacing(2)

    @property
    def row_count(self) -> int:
        return len(self._rows)

    def add_row(self, name_cell: QWidget, value_cell: QWidget) -> int:
        row = len(self._rows)
        self.addWidget(name_cell, row, 0)
        self.addWidget(value_cell, row, 1)
        self._rows.append((name_cell, value_cell))
        return row

    def add_header_row(self, cell: QWidget) -> int:
        row = len(self._rows)
        self.addWidget(cell, row, 0, 1, 2)
        self._rows.append((cell,))
        return row

    def row_cells(self, row: int) -> Tuple[QWidget, ...]:
        return self._rows[row]

    def set_row_visible(self, row: int, visible: bool) -> None:
        for cell in self._rows[row]:
            cell.setVisible(visible)

    def clear_rows(self) -> None:
        for cells in self._rows:
            for cell in cells:
                self.removeWidget(cell)
                cell.setParent(None)
                cell.deleteLater()
        logger.debug(f"Cleared {len(self._rows)} rows")
        self._rows = []
