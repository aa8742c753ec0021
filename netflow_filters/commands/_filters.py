"""Shared helpers for commands that take filters on the command line."""

from __future__ import annotations

import asyncio
from dataclasses import replace

from netflow_filters.filters.catalog import FilterCatalog
from netflow_filters.filters.model import Filter, FilterValue, Invalid
from netflow_filters.filters.options import create_filter_value
from netflow_filters.filters.url import FILTERS_SEPARATOR, filters_from_url
from netflow_filters.utils.output import create_table, warning

EXIT_SUCCESS = 0
EXIT_INVALID = 1


def load_filters(text: str, catalog: FilterCatalog) -> tuple[list[Filter], list[str]]:
    """Read filters written in the page URL form and validate their values.

    Valid values are then resolved to their option value, so ``tcp`` becomes
    ``6`` and ``http`` becomes ``80``.

    Returns:
        Tuple of (filters with normalized values, list of validation errors).
    """
    return asyncio.run(_load_filters(text, catalog))


async def _load_filters(text: str, catalog: FilterCatalog) -> tuple[list[Filter], list[str]]:
    filters = await filters_from_url(text, catalog)

    entries = [e for e in text.split(FILTERS_SEPARATOR) if e]
    if len(filters) < len(entries):
        warning(f"Ignored {len(entries) - len(filters)} unknown or malformed filter(s)")

    errors: list[str] = []
    normalized: list[Filter] = []
    for f in filters:
        values: list[FilterValue] = []
        for value in f.values:
            result = f.definition.validate(value.v)
            if isinstance(result, Invalid):
                errors.append(f"{f.definition.id}={value.v}: {result.reason}")
                continue
            values.append(await create_filter_value(f.definition, result.value))
        normalized.append(replace(f, values=values))
    return normalized, errors


def filters_table(filters: list[Filter]):
    """Build a table describing active filters."""
    table = create_table(title="Filters")
    table.add_column("Filter", style="filter.id")
    table.add_column("Category")
    table.add_column("Operator")
    table.add_column("Values", style="filter.value")
    for f in filters:
        table.add_row(
            f.definition.id,
            f.definition.category.value,
            "!=" if f.negated else "=",
            ", ".join(v.v if v.display is None else f"{v.display} ({v.v})" for v in f.values),
        )
    return table
