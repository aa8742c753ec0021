"""Unit tests for active filter list editing."""

from __future__ import annotations

from netflow_filters.filters.model import FilterValue
from netflow_filters.filters.state import (
    add_filter_value,
    find_filter,
    remove_filter,
    remove_filter_value,
)


def test_add_creates_filter(catalog) -> None:
    result = add_filter_value([], catalog.get("port"), FilterValue(v="80"))
    assert result.added
    assert len(result.filters) == 1
    assert result.filters[0].values == [FilterValue(v="80")]


def test_add_appends_to_existing(catalog, make_filter) -> None:
    filters = [make_filter("port", "80")]
    result = add_filter_value(filters, catalog.get("port"), FilterValue(v="443"))
    assert [v.v for v in result.filters[0].values] == ["80", "443"]
    # Input untouched
    assert [v.v for v in filters[0].values] == ["80"]


def test_duplicate_value_rejected(catalog, make_filter) -> None:
    filters = [make_filter("port", "80")]
    result = add_filter_value(filters, catalog.get("port"), FilterValue(v="80", display="http"))
    assert not result.added
    assert result.error == "Filter already exists"
    assert [v.v for v in result.filters[0].values] == ["80"]


def test_duplicate_message_translated(catalog, make_filter) -> None:
    result = add_filter_value(
        [make_filter("port", "80")],
        catalog.get("port"),
        FilterValue(v="80"),
        t=lambda s: s.lower(),
    )
    assert result.error == "filter already exists"


def test_negation_makes_a_separate_filter(catalog, make_filter) -> None:
    filters = [make_filter("port", "80")]
    result = add_filter_value(filters, catalog.get("port"), FilterValue(v="80"), negated=True)
    assert result.added
    assert [(f.negated, [v.v for v in f.values]) for f in result.filters] == [
        (False, ["80"]),
        (True, ["80"]),
    ]
    assert find_filter(result.filters, catalog.get("port"), negated=True) is result.filters[1]


def test_remove_value(make_filter) -> None:
    filters = [make_filter("port", "80", "443"), make_filter("protocol", "TCP")]
    remaining = remove_filter_value(filters, filters[0], "80")
    assert [[v.v for v in f.values] for f in remaining] == [["443"], ["TCP"]]

    remaining = remove_filter_value(remaining, filters[1], "TCP")
    assert [f.definition.id for f in remaining] == ["port"]


def test_remove_filter(make_filter) -> None:
    filters = [make_filter("port", "80"), make_filter("port", "22", negated=True)]
    remaining = remove_filter(filters, filters[1])
    assert [(f.definition.id, f.negated) for f in remaining] == [("port", False)]
