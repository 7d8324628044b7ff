"""
Object source: the property set of the selected object.

Binding an object enumerates its browsable descriptors, builds one
PropertyModel per descriptor, sorts them, and subscribes to the object's
change notifications. Rebinding discards and rebuilds the whole set.
"""

import logging
from typing import Any, Dict, List, Optional

from PyQt6.QtCore import QObject, pyqtSignal

from pyqt_propgrid.core.conversions import decamelize
from pyqt_propgrid.core.performance_monitor import timer
from pyqt_propgrid.model.descriptors import describe_object
from pyqt_propgrid.model.metadata import TypeMetadata
from pyqt_propgrid.model.property_model import PropertyModel
from pyqt_propgrid.protocols.grid_config import get_grid_config
from pyqt_propgrid.protocols.host_protocols import PropertyChangeNotifier
from pyqt_propgrid.services.flag_context_manager import FlagContextManager

logger = logging.getLogger(__name__)


class ObjectSource(QObject):
    """
    Ordered, name-unique set of PropertyModels for one selected object.

    Signals:
        property_changed(str): a model value changed or the host announced a change
        state_changed(): validity or read-only aggregates may have changed
        rebound(): a new object was bound (the model set was rebuilt)

    Example:
        source = ObjectSource()
        source.bind(customer)
        source.get_property("name").set_value("Ada")
        source.get_property("name").commit_or_rollback()
    """

    property_changed = pyqtSignal(str)
    state_changed = pyqtSignal()
    rebound = pyqtSignal()

    def __init__(self, live_sync: Optional[bool] = None, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._selected_object: Any = None
        self._metadata: Optional[TypeMetadata] = None
        self._properties: List[PropertyModel] = []
        self._by_name: Dict[str, PropertyModel] = {}
        self._live_sync = get_grid_config().live_sync if live_sync is None else live_sync
        self._subscribed_to: Optional[PropertyChangeNotifier] = None
        self._rebinding = False

    @property
    def selected_object(self) -> Any:
        return self._selected_object

    @property
    def metadata(self) -> Optional[TypeMetadata]:
        return self._metadata

    @property
    def properties(self) -> List[PropertyModel]:
        return list(self._properties)

    def __iter__(self):
        return iter(list(self._properties))

    def __len__(self) -> int:
        return len(self._properties)

    @property
    def component_name(self) -> str:
        """Display name of the selected object's type."""
        if self._selected_object is None:
            return ""
        return decamelize(type(self._selected_object).__name__)

    @property
    def live_sync(self) -> bool:
        return self._live_sync

    @live_sync.setter
    def live_sync(self, enabled: bool) -> None:
        self._live_sync = enabled
        for model in self._properties:
            model.live_sync = enabled

    def bind(self, obj: Any, metadata: Optional[TypeMetadata] = None) -> None:
        """
        Bind a new selected object, rebuilding every PropertyModel.

        Binding None yields an empty, valid source.

        Args:
            obj: Object to inspect
            metadata: Bind-time metadata overriding registered metadata
        """
        with FlagContextManager.manage_flags(self, _rebinding=True):
            self._unsubscribe()
            self._release_models()
            self._selected_object = obj
            self._metadata = metadata

            if obj is not None:
                with timer("Bind selected object", threshold_ms=10.0, log_args=True,
                           type_name=type(obj).__name__):
                    self._properties = self._build_models(obj, metadata)
                self._by_name = {model.name: model for model in self._properties}
                self._subscribe(obj)

        logger.debug(f"Bound {type(obj).__name__ if obj is not None else None} "
                     f"with {len(self._properties)} properties")
        self.rebound.emit()
        self.state_changed.emit()

    def clear(self) -> None:
        self.bind(None)

    def get_property(self, name: str) -> Optional[PropertyModel]:
        """Model for ``name`` (exact, case-sensitive) or None."""
        return self._by_name.get(name)

    def refresh_all(self) -> None:
        """Re-read every model from the live object. Model identity is kept."""
        for model in self._properties:
            model.refresh_from_source()

    def refresh_property(self, name: str) -> bool:
        model = self.get_property(name)
        if model is None:
            return False
        model.refresh_from_source()
        return True

    def get_property_value(self, name: str, default: Any = None) -> Any:
        model = self.get_property(name)
        return model.value if model is not None else default

    def set_property_value(self, name: str, value: Any) -> Any:
        """
        Set a model's value (committing under live sync).

        Returns:
            The previous value

        Raises:
            KeyError: If no property has that name
        """
        model = self.get_property(name)
        if model is None:
            raise KeyError(f"No property '{name}' on {self.component_name or 'empty source'}")
        previous = model.value
        model.set_value(value)
        return previous

    # Aggregates

    @property
    def is_valid(self) -> bool:
        return all(model.is_valid for model in self._properties)

    def get_errors(self) -> Dict[str, List[Any]]:
        """Errors of every invalid property, keyed by property name."""
        errors = {}
        for model in self._properties:
            model_errors = model.get_errors()
            if model_errors:
                errors[model.name] = model_errors
        return errors

    @property
    def is_any_property_read_write(self) -> bool:
        return any(model.is_read_write for model in self._properties)

    @property
    def are_all_properties_read_only(self) -> bool:
        return all(model.is_read_only for model in self._properties)

    @property
    def is_valid_and_any_property_read_write(self) -> bool:
        return self.is_valid and self.is_any_property_read_write

    # Internals

    def _build_models(self, obj: Any, metadata: Optional[TypeMetadata]) -> List[PropertyModel]:
        models = []
        for descriptor in describe_object(obj, metadata):
            model = PropertyModel(obj, descriptor, live_sync=self._live_sync, parent=self)
            try:
                model.read_from_source()
            except Exception as e:
                # A failing getter excludes the property, not the whole object
                logger.debug(f"Excluding {type(obj).__name__}.{descriptor.name}: {e}")
                model.setParent(None)
                model.deleteLater()
                continue
            self._connect_model(model)
            models.append(model)
        models.sort(key=PropertyModel.sort_key)
        return models

    def _connect_model(self, model: PropertyModel) -> None:
        name = model.name
        model.value_changed.connect(lambda _value, name=name: self.property_changed.emit(name))
        model.errors_changed.connect(self.state_changed)
        model.read_only_changed.connect(lambda _read_only: self.state_changed.emit())

    def _release_models(self) -> None:
        for model in self._properties:
            model.blockSignals(True)
            model.setParent(None)
            model.deleteLater()
        self._properties = []
        self._by_name = {}

    def _subscribe(self, obj: Any) -> None:
        if isinstance(obj, PropertyChangeNotifier):
            obj.add_property_changed_handler(self._on_source_property_changed)
            self._subscribed_to = obj

    def _unsubscribe(self) -> None:
        if self._subscribed_to is not None:
            self._subscribed_to.remove_property_changed_handler(self._on_source_property_changed)
            self._subscribed_to = None

    def _on_source_property_changed(self, sender: Any, name: Optional[str]) -> None:
        if self._rebinding:
            return
        if not name:
            self.refresh_all()
            return
        model = self.get_property(name)
        if model is None:
            self.property_changed.emit(name)
            return
        # the model re-broadcasts through value_changed if the value moved
        model.refresh_from_source()
