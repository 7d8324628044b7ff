"""
Layout collaborator contract.

The grid widget hands its rows to a RowContainer: one name cell and one
value cell per property, plus full-width header rows for categories. How
rows are actually laid out is up to the implementation.
"""

from abc import ABC, abstractmethod
from typing import Any


class RowContainer(ABC):
    """Two-column row container used by the property grid."""

    @abstractmethod
    def add_row(self, name_cell: Any, value_cell: Any) -> int:
        """
        Append a property row.

        Returns:
            Index of the new row
        """
        pass

    @abstractmethod
    def add_header_row(self, cell: Any) -> int:
        """Append a row whose single cell spans both columns."""
        pass

    @abstractmethod
    def clear_rows(self) -> None:
        """Remove every row. Cells are released, not reused."""
        pass

    @property
    @abstractmethod
    def row_count(self) -> int:
        pass
