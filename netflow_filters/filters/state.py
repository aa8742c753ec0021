"""Editing operations on the list of active filters.

Operations never mutate their input; they return a new list.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace

from netflow_filters.filters.model import Filter, FilterDefinition, FilterValue

Translate = Callable[[str], str]


def _identity(text: str) -> str:
    return text


@dataclass
class AddFilterResult:
    """Outcome of adding a value. ``error`` is set when nothing changed."""

    filters: list[Filter] = field(default_factory=list)
    error: str | None = None

    @property
    def added(self) -> bool:
        return self.error is None


def _copy(filters: Sequence[Filter]) -> list[Filter]:
    return [replace(f, values=list(f.values)) for f in filters]


def find_filter(
    filters: Sequence[Filter], definition: FilterDefinition, negated: bool = False
) -> Filter | None:
    """Find the active filter for a definition and negation flag."""
    for f in filters:
        if f.definition.id == definition.id and f.negated == negated:
            return f
    return None


def add_filter_value(
    filters: Sequence[Filter],
    definition: FilterDefinition,
    value: FilterValue,
    negated: bool = False,
    t: Translate = _identity,
) -> AddFilterResult:
    """Add a value under a definition, creating the filter when needed.

    A value already present under the same definition and negation is
    refused with "Filter already exists".
    """
    new_filters = _copy(filters)
    found = find_filter(new_filters, definition, negated)
    if found is None:
        new_filters.append(Filter(definition=definition, values=[value], negated=negated))
    elif value.v in (v.v for v in found.values):
        return AddFilterResult(filters=list(filters), error=t("Filter already exists"))
    else:
        found.values.append(value)
    return AddFilterResult(filters=new_filters)


def remove_filter_value(filters: Sequence[Filter], target: Filter, value: str) -> list[Filter]:
    """Remove one value; the filter goes away with its last value."""
    new_filters = []
    for f in _copy(filters):
        if f.definition.id == target.definition.id and f.negated == target.negated:
            f.values = [v for v in f.values if v.v != value]
            if not f.values:
                continue
        new_filters.append(f)
    return new_filters


def remove_filter(filters: Sequence[Filter], target: Filter) -> list[Filter]:
    return [
        f
        for f in _copy(filters)
        if not (f.definition.id == target.definition.id and f.negated == target.negated)
    ]
