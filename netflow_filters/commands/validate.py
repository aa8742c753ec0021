"""Validate a single filter value."""

from __future__ import annotations

import asyncio

import click

from netflow_filters.cli import Context, pass_context
from netflow_filters.exceptions import UnknownFilterError
from netflow_filters.filters.model import Invalid
from netflow_filters.filters.options import create_filter_value
from netflow_filters.utils.output import console, error

EXIT_SUCCESS = 0
EXIT_INVALID = 1
EXIT_UNKNOWN_FILTER = 2


@click.command("validate")
@click.argument("filter_id")
@click.argument("value", default="")
@pass_context
def cli(ctx: Context, filter_id: str, value: str) -> None:
    """Check VALUE for the filter FILTER_ID and print its normalized form.

    \b
    Examples:
      netflow-filters validate protocol tcp      -> TCP
      netflow-filters validate src_name ""       -> ""
      netflow-filters validate port nope         -> Unknown port
    """
    try:
        definition = ctx.catalog.get(filter_id)
    except UnknownFilterError as e:
        error(str(e), hint=f"Available: {', '.join(ctx.catalog.ids)}")
        raise SystemExit(EXIT_UNKNOWN_FILTER)

    result = definition.validate(value)
    if isinstance(result, Invalid):
        error(result.reason)
        raise SystemExit(EXIT_INVALID)

    filter_value = asyncio.run(create_filter_value(definition, result.value))
    if filter_value.display and filter_value.display != filter_value.v:
        console.print(f"{filter_value.v} ({filter_value.display})", markup=False)
    else:
        console.print(filter_value.v, markup=False)
    raise SystemExit(EXIT_SUCCESS)
