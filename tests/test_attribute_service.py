"""Tests for option lookup and the image attribute registry."""
import threading
import pytest
from unittest.mock import MagicMock
from swatches.models import Attribute, AttributeOption
from swatches.services.attribute_service import (
    AttributeMetadataSource,
    ImageAttributeRegistry,
    OptionLookup,
)


def _color():
    color = Attribute(code="color", frontend_input="select")
    color.options.append(AttributeOption(id=10, label="Red", sort_order=0))
    color.options.append(AttributeOption(id=11, label="Blue", sort_order=1))
    return color


def test_option_lookup_single_label(db):
    assert OptionLookup().resolve(_color(), "Blue") == [11]


def test_option_lookup_keeps_duplicates(db):
    assert OptionLookup().resolve(_color(), ["Red", "Red"]) == [10, 10]


def test_option_lookup_unknown_label(db):
    assert OptionLookup().resolve(_color(), ["Unknown"]) == []


def test_option_lookup_is_case_sensitive(db):
    assert OptionLookup().resolve(_color(), "red") == []


def test_option_lookup_preserves_label_order(db):
    assert OptionLookup().resolve(_color(), ("Blue", "Nope", "Red")) == [11, 10]


def test_registry_queries_source_once():
    source = MagicMock()
    source.attribute_codes_by_input_type.return_value = ["image", "thumbnail"]
    registry = ImageAttributeRegistry(source)

    first = registry.image_attribute_codes()
    second = registry.image_attribute_codes()

    assert first == second == ("image", "thumbnail")
    source.attribute_codes_by_input_type.assert_called_once_with("media_image")


def test_registry_memoizes_empty_result():
    source = MagicMock()
    source.attribute_codes_by_input_type.return_value = []
    registry = ImageAttributeRegistry(source)

    assert registry.image_attribute_codes() == ()
    assert registry.image_attribute_codes() == ()
    assert source.attribute_codes_by_input_type.call_count == 1


def test_registry_retries_after_failure():
    source = MagicMock()
    source.attribute_codes_by_input_type.side_effect = [RuntimeError("down"), ["image"]]
    registry = ImageAttributeRegistry(source)

    with pytest.raises(RuntimeError):
        registry.image_attribute_codes()
    assert registry.image_attribute_codes() == ("image",)


def test_registry_concurrent_first_use_fills_once():
    started = threading.Event()
    source = MagicMock()

    def slow_lookup(input_type):
        started.wait(timeout=1)
        return ["image"]

    source.attribute_codes_by_input_type.side_effect = slow_lookup
    registry = ImageAttributeRegistry(source)
    results = []

    threads = [
        threading.Thread(target=lambda: results.append(registry.image_attribute_codes()))
        for _ in range(8)
    ]
    for t in threads:
        t.start()
    started.set()
    for t in threads:
        t.join()

    assert results == [("image",)] * 8
    assert source.attribute_codes_by_input_type.call_count == 1


def test_metadata_source_codes_by_input_type(catalog):
    source = AttributeMetadataSource()
    assert source.attribute_codes_by_input_type("media_image") == ["swatch_image"]
    assert source.attribute_codes_by_input_type("price") == []


def test_metadata_source_attributes_of(catalog):
    attributes = AttributeMetadataSource().attributes_of(catalog["parent"])
    assert [a.code for a in attributes] == ["color", "size"]


def test_option_lookup_accepts_sets(db):
    assert OptionLookup().resolve(_color(), {"Red"}) == [10]
    assert sorted(OptionLookup().resolve(_color(), frozenset({"Red", "Blue"}))) == [10, 11]
