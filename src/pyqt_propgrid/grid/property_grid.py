"""
PropertyGrid widget: the host-facing facade.

Assigning ``selected_object`` binds it to an ObjectSource, groups the
resulting property models into categories and lays out one name cell and
one PropertyValueSurface per property.
"""

import logging
from typing import Any, Dict, List, NamedTuple, Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import QLabel, QScrollArea, QToolButton, QVBoxLayout, QWidget

from pyqt_propgrid.core.performance_monitor import timer
from pyqt_propgrid.editors.editor_resolver import EditorResolver
from pyqt_propgrid.grid.row_container import GridRowContainer
from pyqt_propgrid.grid.value_surface import PropertyValueSurface
from pyqt_propgrid.model.categories import CategoryModel, CategorySource
from pyqt_propgrid.model.metadata import TypeMetadata
from pyqt_propgrid.model.object_source import ObjectSource
from pyqt_propgrid.model.property_model import PropertyModel
from pyqt_propgrid.protocols.grid_config import PropertyGridConfig, get_grid_config

logger = logging.getLogger(__name__)


class PropertyVisuals(NamedTuple):
    """Widgets making up one property row."""
    name_cell: QLabel
    value_surface: PropertyValueSurface
    row: int


class PropertyGrid(QWidget):
    """
    Property grid widget.

    Signals:
        selected_object_changed(object): a new object was bound
        property_value_changed(str): a property value changed

    Example:
        grid = PropertyGrid()
        grid.group_by_category = True
        grid.set_selected_object(settings)
    """

    selected_object_changed = pyqtSignal(object)
    property_value_changed = pyqtSignal(str)

    def __init__(self, parent: Optional[QWidget] = None,
                 resolver: Optional[EditorResolver] = None,
                 config: Optional[PropertyGridConfig] = None):
        super().__init__(parent)
        config = config or get_grid_config()
        self._resolver = resolver or EditorResolver()
        self._source = ObjectSource(live_sync=config.live_sync, parent=self)
        self._category_source = CategorySource(self)
        self._group_by_category = config.group_by_category
        self._unspecified_category_name = config.unspecified_category_name
        self._is_read_only = False
        self._visuals: Dict[str, PropertyVisuals] = {}
        self._headers: Dict[str, QToolButton] = {}

        self._content = QWidget()
        self._rows = GridRowContainer(self._content)
        self._rows.setAlignment(Qt.AlignmentFlag.AlignTop)

        scroll = QScrollArea(self)
        scroll.setWidgetResizable(True)
        scroll.setWidget(self._content)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(scroll)

        self._source.property_changed.connect(self.property_value_changed)

    # Host-facing state

    @property
    def source(self) -> ObjectSource:
        return self._source

    @property
    def row_container(self) -> GridRowContainer:
        return self._rows

    @property
    def categories(self) -> List[CategoryModel]:
        return self._category_source.categories

    @property
    def selected_object(self) -> Any:
        return self._source.selected_object

    @selected_object.setter
    def selected_object(self, obj: Any) -> None:
        self.set_selected_object(obj)

    def set_selected_object(self, obj: Any, metadata: Optional[TypeMetadata] = None) -> None:
        """
        Bind ``obj`` and rebuild every row.

        Raises:
            EditorResolutionError: If a property's editor override is invalid
        """
        with timer("Populate property grid", threshold_ms=20.0):
            self._release_rows()
            self._source.bind(obj, metadata)
            if self._is_read_only:
                self._apply_read_only()
            self._build_rows()
        self.selected_object_changed.emit(obj)

    @property
    def live_sync(self) -> bool:
        return self._source.live_sync

    @live_sync.setter
    def live_sync(self, enabled: bool) -> None:
        self._source.live_sync = enabled

    @property
    def group_by_category(self) -> bool:
        return self._group_by_category

    @group_by_category.setter
    def group_by_category(self, enabled: bool) -> None:
        if enabled == self._group_by_category:
            return
        self._group_by_category = enabled
        self._rebuild_rows()

    @property
    def unspecified_category_name(self) -> Optional[str]:
        return self._unspecified_category_name

    @unspecified_category_name.setter
    def unspecified_category_name(self, name: Optional[str]) -> None:
        self._unspecified_category_name = name
        if self._group_by_category:
            self._rebuild_rows()

    @property
    def is_read_only(self) -> bool:
        return self._is_read_only

    @is_read_only.setter
    def is_read_only(self, read_only: bool) -> None:
        if read_only == self._is_read_only:
            return
        self._is_read_only = read_only
        self._apply_read_only()

    @property
    def is_valid(self) -> bool:
        return self._source.is_valid

    def get_errors(self) -> Dict[str, List[Any]]:
        return self._source.get_errors()

    def get_property(self, name: str) -> Optional[PropertyModel]:
        return self._source.get_property(name)

    def get_visuals(self, name: str) -> Optional[PropertyVisuals]:
        """Name cell, value surface and row index of a property, or None."""
        return self._visuals.get(name)

    def get_category_header(self, name: str) -> Optional[QToolButton]:
        return self._headers.get(name.casefold())

    def refresh(self) -> None:
        """Re-read every property from the selected object."""
        self._source.refresh_all()

    def commit_all(self) -> bool:
        """
        Commit every read-write property.

        Returns:
            True if every commit succeeded
        """
        results = [model.commit_or_rollback() for model in self._source if model.is_read_write]
        return all(results)

    # Rows

    def _rebuild_rows(self) -> None:
        self._release_rows()
        self._build_rows()

    def _release_rows(self) -> None:
        for visuals in self._visuals.values():
            visuals.value_surface.detach()
        self._visuals = {}
        self._headers = {}
        self._rows.clear_rows()

    def _build_rows(self) -> None:
        categories = self._category_source.rebuild(
            self._source, self._group_by_category, self._unspecified_category_name
        )
        for category in categories:
            rows = []
            if self._group_by_category:
                self._add_category_header(category, rows)
            for model in category.properties:
                rows.append(self._add_property_row(model))
            if self._group_by_category:
                for row in rows:
                    self._rows.set_row_visible(row, category.is_expanded)
        logger.debug(f"Built {self._rows.row_count} rows for {self._source.component_name or 'nothing'}")

    def _add_category_header(self, category: CategoryModel, rows: List[int]) -> None:
        header = QToolButton()
        header.setText(category.display_name)
        header.setCheckable(True)
        header.setChecked(category.is_expanded)
        header.setToolButtonStyle(Qt.ToolButtonStyle.ToolButtonTextBesideIcon)
        header.setArrowType(Qt.ArrowType.DownArrow if category.is_expanded else Qt.ArrowType.RightArrow)
        header.setAutoRaise(True)
        self._rows.add_header_row(header)
        self._headers[category.name.casefold()] = header

        def on_expanded_changed(expanded: bool) -> None:
            header.setArrowType(Qt.ArrowType.DownArrow if expanded else Qt.ArrowType.RightArrow)
            for row in rows:
                self._rows.set_row_visible(row, expanded)

        header.toggled.connect(lambda checked: setattr(category, "is_expanded", checked))
        category.expanded_changed.connect(on_expanded_changed)

    def _add_property_row(self, model: PropertyModel) -> int:
        name_cell = QLabel(model.display_name)
        if model.description:
            name_cell.setToolTip(model.description)
        surface = PropertyValueSurface(self._resolver)
        surface.attach(model)
        row = self._rows.add_row(name_cell, surface)
        self._visuals[model.name] = PropertyVisuals(name_cell, surface, row)
        return row

    def _apply_read_only(self) -> None:
        for model in self._source:
            model.set_read_only(True if self._is_read_only else model.declared_read_only)
