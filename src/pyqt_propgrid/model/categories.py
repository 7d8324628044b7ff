"""
Category grouping of an object source's properties.
"""

import logging
from typing import Dict, List, Optional, Tuple

from PyQt6.QtCore import QObject, pyqtSignal

from pyqt_propgrid.core.performance_monitor import timed
from pyqt_propgrid.model.metadata import TypeMetadata, get_type_metadata
from pyqt_propgrid.model.object_source import ObjectSource
from pyqt_propgrid.model.property_model import PropertyModel
from pyqt_propgrid.protocols.grid_config import get_grid_config

logger = logging.getLogger(__name__)

DEFAULT_UNSPECIFIED_CATEGORY = "Misc"


class CategoryModel(QObject):
    """Ordered, non-empty group of property models sharing a category key."""

    expanded_changed = pyqtSignal(bool)

    def __init__(self, name: str, is_expanded: bool = True, sort_order: int = 0,
                 parent: Optional[QObject] = None):
        super().__init__(parent)
        self._name = name
        self._is_expanded = is_expanded
        self.sort_order = sort_order
        self.properties: List[PropertyModel] = []

    def __repr__(self) -> str:
        return f"<CategoryModel {self._name} ({len(self.properties)} properties)>"

    @property
    def name(self) -> str:
        return self._name

    @property
    def display_name(self) -> str:
        return self._name

    @property
    def is_expanded(self) -> bool:
        return self._is_expanded

    @is_expanded.setter
    def is_expanded(self, expanded: bool) -> None:
        if expanded == self._is_expanded:
            return
        self._is_expanded = expanded
        self.expanded_changed.emit(expanded)

    def sort_key(self) -> Tuple[int, str]:
        return -self.sort_order, self._name.casefold()


class CategorySource(QObject):
    """
    Partitions an ObjectSource into ordered categories.

    Without grouping there is a single category holding every property in
    pure name order. With grouping, properties are partitioned by category
    name (case-insensitive) and both categories and their members are
    ordered by sort order descending then name.
    """

    rebuilt = pyqtSignal()

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._categories: List[CategoryModel] = []
        self._group_by_category = False

    @property
    def categories(self) -> List[CategoryModel]:
        return list(self._categories)

    @property
    def group_by_category(self) -> bool:
        return self._group_by_category

    def get_category(self, name: str) -> Optional[CategoryModel]:
        key = name.casefold()
        for category in self._categories:
            if category.name.casefold() == key:
                return category
        return None

    @timed("Rebuild categories", threshold_ms=5.0)
    def rebuild(self, source: ObjectSource, group_by_category: bool,
                unspecified_name: Optional[str] = None,
                metadata: Optional[TypeMetadata] = None) -> List[CategoryModel]:
        """
        Recompute the categories of ``source``.

        Args:
            source: Bound object source
            group_by_category: Partition by category, or one flat category
            unspecified_name: Category of properties declaring none
            metadata: Bind-time metadata holding CategoryOptions

        Returns:
            The ordered categories
        """
        self._release_categories()
        self._group_by_category = group_by_category
        config = get_grid_config()
        models = source.properties

        if not group_by_category:
            everything = CategoryModel(config.all_category_name, parent=self)
            for model in models:
                model.sort_order = 0
            everything.properties = sorted(models, key=PropertyModel.sort_key)
            self._categories = [everything] if models else []
            self.rebuilt.emit()
            return self.categories

        unspecified = unspecified_name or config.unspecified_category_name or DEFAULT_UNSPECIFIED_CATEGORY
        type_metadata = self._type_metadata(source, metadata)

        groups: Dict[str, CategoryModel] = {}
        for model in models:
            model.reset_sort_order()
            name = model.category or unspecified
            key = name.casefold()
            category = groups.get(key)
            if category is None:
                category = CategoryModel(name, parent=self)
                options = type_metadata.category_options(name)
                if options is not None:
                    category.is_expanded = options.is_expanded
                    if options.sort_order != 0:
                        category.sort_order = options.sort_order
                groups[key] = category
            category.properties.append(model)

        for category in groups.values():
            category.properties.sort(key=PropertyModel.sort_key)
        self._categories = sorted(groups.values(), key=CategoryModel.sort_key)
        logger.debug(f"Grouped {len(models)} properties into "
                     f"{[c.name for c in self._categories]}")
        self.rebuilt.emit()
        return self.categories

    def _type_metadata(self, source: ObjectSource, metadata: Optional[TypeMetadata]) -> TypeMetadata:
        obj = source.selected_object
        if obj is None:
            return TypeMetadata()
        return get_type_metadata(type(obj)).merged(metadata or source.metadata)

    def _release_categories(self) -> None:
        for category in self._categories:
            category.setParent(None)
            category.deleteLater()
        self._categories = []
