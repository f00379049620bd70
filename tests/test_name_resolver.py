"""Tests for component identifier parsing"""

import pytest

from component_tool.api.exceptions import (
    InvalidPackageNameError,
    MalformedIdentifierError,
    MissingSegmentError,
    ParseError,
)
from component_tool.core.name_resolver import parse_component_identifier, parse_package_name
from component_tool.models import ComponentIdentifier


@pytest.mark.parametrize("raw, expected", [
    ("orders", ComponentIdentifier(name="orders")),
    ("shop/orders", ComponentIdentifier(name="orders", project="shop")),
    ("acme/shop/orders", ComponentIdentifier(name="orders", project="shop", account="acme")),
    ("ns:orders", ComponentIdentifier(name="ns:orders")),
])
def test_parse_accepts_one_to_three_segments(raw, expected):
    identifier = parse_component_identifier(raw)

    assert identifier == expected
    assert str(identifier) == raw


@pytest.mark.parametrize("raw, kind", [
    ("", "component"),
    ("shop/", "component"),
    ("/orders", "project"),
    ("acme//orders", "project"),
    ("/shop/orders", "account"),
])
def test_parse_names_the_empty_segment(raw, kind):
    with pytest.raises(MissingSegmentError) as exc_info:
        parse_component_identifier(raw)

    assert exc_info.value.kind == kind
    assert str(exc_info.value) == f"Missing {kind} part in component name!"


def test_parse_rejects_more_than_three_segments():
    with pytest.raises(MalformedIdentifierError) as exc_info:
        parse_component_identifier("a/b/c/d")

    assert exc_info.value.raw == "a/b/c/d"
    assert isinstance(exc_info.value, ParseError)


def test_parse_package_name_splits_namespace():
    assert parse_package_name("my-ns:order-book") == ("my-ns", "order-book")


def test_invalid_package_name_is_not_an_identifier_error():
    with pytest.raises(InvalidPackageNameError) as exc_info:
        parse_package_name("orders")

    assert not isinstance(exc_info.value, ParseError)
    assert "<namespace>:<name>" in str(exc_info.value)
