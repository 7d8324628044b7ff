"""Tests for property metadata and descriptor discovery."""

import logging
from dataclasses import dataclass
from typing import Any

import pytest

from sample_objects import AudioSettings, Customer, Days, ReadOnlyThing


def test_property_options_validation():
    """Inconsistent options fail at construction."""
    from pyqt_propgrid.exceptions import MetadataError
    from pyqt_propgrid.model import PropertyOptions

    with pytest.raises(MetadataError):
        PropertyOptions(minimum=5, maximum=1)
    with pytest.raises(MetadataError):
        PropertyOptions(step=0)
    with pytest.raises(MetadataError):
        PropertyOptions(allowed_values=[])
    with pytest.raises(MetadataError):
        PropertyOptions(choices=["a", "b"])

    assert PropertyOptions(allowed_values=[1, 2]).allowed_values == (1, 2)
    assert PropertyOptions(minimum=0, maximum=1).has_range


def test_property_options_merge():
    """Options passed to the override win; dynamic options are merged."""
    from pyqt_propgrid.model import PropertyOptions

    base = PropertyOptions(category="A", sort_order=3, dynamic_options={"x": 1})
    merged = base.merged(PropertyOptions(display_name="Shown", dynamic_options={"y": 2}))
    assert merged.category == "A"
    assert merged.sort_order == 3
    assert merged.display_name == "Shown"
    assert merged.dynamic_options == {"x": 1, "y": 2}
    assert base.merged(None) is base


def test_property_options_defaults():
    """Options built without arguments declare nothing."""
    import pyqt_propgrid.model.metadata as metadata

    options = metadata.PropertyOptions()
    assert not options.has_default_value
    assert not options.has_range
    assert options.browsable and options.sort_order == 0 and options.category is None
    assert options.explicit == frozenset()

    assert metadata.PropertyOptions(default_value=None).has_default_value


def test_merge_restores_default_valued_options():
    """An override passing a default-valued option still replaces the base."""
    from pyqt_propgrid.model import PropertyOptions

    base = PropertyOptions(browsable=False, sort_order=5, category="Advanced")
    merged = base.merged(PropertyOptions(browsable=True, sort_order=0, category=None))
    assert merged.browsable
    assert merged.sort_order == 0
    assert merged.category is None

    kept = base.merged(PropertyOptions(description="Kept"))
    assert not kept.browsable
    assert (kept.sort_order, kept.category) == (5, "Advanced")
    assert kept.merged(PropertyOptions(sort_order=1)).browsable is False


def test_type_metadata_is_inherited():
    """Subclasses see their bases' metadata, most derived winning."""
    from pyqt_propgrid.model import (
        PropertyOptions, TypeMetadata, get_type_metadata, register_type_metadata,
        unregister_type_metadata,
    )

    class Base:
        pass

    class Derived(Base):
        pass

    register_type_metadata(Base, TypeMetadata(properties={"size": PropertyOptions(category="Layout", minimum=1)}))
    register_type_metadata(Derived, TypeMetadata(properties={"size": PropertyOptions(maximum=10)}))
    try:
        options = get_type_metadata(Derived).options_for("size")
        assert options.category == "Layout"
        assert (options.minimum, options.maximum) == (1, 10)
        assert get_type_metadata(Base).options_for("size").maximum is None
    finally:
        unregister_type_metadata(Base)
        unregister_type_metadata(Derived)


def test_register_type_metadata_warns_on_overwrite(caplog):
    """Registering twice overwrites with a warning."""
    from pyqt_propgrid.model import TypeMetadata, register_type_metadata, unregister_type_metadata

    class Thing:
        pass

    register_type_metadata(Thing, TypeMetadata())
    try:
        with caplog.at_level(logging.WARNING, logger="pyqt_propgrid.model.metadata"):
            register_type_metadata(Thing, TypeMetadata(read_only=True))
        assert "already registered" in caplog.text
    finally:
        unregister_type_metadata(Thing)


def test_category_options_lookup_ignores_case():
    """Category keys match case-insensitively."""
    from pyqt_propgrid.model import CategoryOptions, TypeMetadata

    metadata = TypeMetadata(categories={"Advanced": CategoryOptions(is_expanded=False)})
    assert metadata.category_options("advanced").is_expanded is False
    assert metadata.category_options("Other") is None


def test_describe_dataclass():
    """Dataclass fields are discovered in declaration order, hidden fields skipped."""
    from pyqt_propgrid.model import describe_object

    descriptors = {d.name: d for d in describe_object(Customer())}
    assert list(descriptors) == ["first_name", "last_name", "age", "days", "mode", "nickname"]

    age = descriptors["age"]
    assert age.declared_type is int
    assert age.can_write
    assert age.category == "Details"
    assert age.display_name == "Age"
    assert not age.has_default_value
    assert descriptors["days"].declared_type is Days
    assert descriptors["first_name"].display_name == "First Name"


def test_describe_include_hidden():
    """Hidden properties are returned on request."""
    from pyqt_propgrid.model import describe_object

    names = [d.name for d in describe_object(Customer(), include_hidden=True)]
    assert "secret" in names


def test_describe_frozen_dataclass_is_read_only():
    """Fields of a frozen dataclass cannot be written."""
    from pyqt_propgrid.model import describe_object

    @dataclass(frozen=True)
    class Point:
        x: int = 1
        y: int = 2

    assert [d.can_write for d in describe_object(Point())] == [False, False]


def test_describe_properties():
    """Properties are writable only with a setter; types come from return hints."""
    from pyqt_propgrid.model import describe_object

    descriptors = {d.name: d for d in describe_object(AudioSettings())}
    assert list(descriptors) == ["name", "enabled", "volume"]
    assert descriptors["volume"].declared_type is int
    assert descriptors["volume"].options.maximum == 100
    assert descriptors["volume"].description == "Output level"

    (identifier,) = describe_object(ReadOnlyThing())
    assert identifier.name == "identifier"
    assert not identifier.can_write
    assert identifier.get_value(ReadOnlyThing()) == 7


def test_describe_instance_attributes():
    """Public non-callable instance attributes are inferred from their values."""
    from pyqt_propgrid.model import describe_object

    class Plain:
        def __init__(self):
            self.count = 3
            self.label = "x"
            self.missing = None
            self._private = 1
            self.callback = print

    descriptors = {d.name: d for d in describe_object(Plain())}
    assert list(descriptors) == ["count", "label", "missing"]
    assert descriptors["count"].declared_type is int
    assert descriptors["label"].declared_type is str
    assert descriptors["missing"].declared_type is Any


def test_describe_excludes_unreadable_untyped_property():
    """An untyped property whose getter fails is left out."""
    from pyqt_propgrid.model import describe_object

    class Flaky:
        @property
        def broken(self):
            raise RuntimeError("not available")

        @property
        def fine(self) -> int:
            return 1

    assert [d.name for d in describe_object(Flaky())] == ["fine"]


def test_bind_time_metadata_overrides_registered():
    """Bind-time metadata wins over registered metadata."""
    from pyqt_propgrid.model import PropertyOptions, TypeMetadata, describe_object

    metadata = TypeMetadata(properties={"volume": PropertyOptions(maximum=11, browsable=True)})
    volume = {d.name: d for d in describe_object(AudioSettings(), metadata)}["volume"]
    assert volume.options.maximum == 11
    assert volume.options.minimum == 0


def test_bind_time_metadata_unhides_registered_property():
    """Bind-time browsable=True shows a property hidden by registered metadata."""
    from pyqt_propgrid.model import (
        PropertyOptions, TypeMetadata, describe_object, register_type_metadata,
        unregister_type_metadata,
    )

    class Credentials:
        def __init__(self):
            self.token = "abc"

    register_type_metadata(Credentials, TypeMetadata(properties={"token": PropertyOptions(browsable=False)}))
    try:
        assert [d.name for d in describe_object(Credentials())] == []
        shown = TypeMetadata(properties={"token": PropertyOptions(browsable=True)})
        assert [d.name for d in describe_object(Credentials(), shown)] == ["token"]
    finally:
        unregister_type_metadata(Credentials)


def test_type_level_read_only():
    """A read-only type makes every descriptor read-only."""
    from pyqt_propgrid.model import TypeMetadata, describe_object

    descriptors = describe_object(Customer(), TypeMetadata(read_only=True))
    assert descriptors and not any(d.can_write for d in descriptors)
