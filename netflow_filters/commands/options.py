"""Show autocomplete suggestions for a filter."""

from __future__ import annotations

import asyncio

import click

from netflow_filters.cli import Context, pass_context
from netflow_filters.exceptions import UnknownFilterError
from netflow_filters.filters.options import get_options
from netflow_filters.utils.output import console, create_table, error, info

EXIT_SUCCESS = 0
EXIT_UNKNOWN_FILTER = 2


@click.command("options")
@click.argument("filter_id")
@click.argument("prefix", default="")
@click.option(
    "--select",
    "selected",
    default=None,
    help="Simulate picking an option, for multi-stage fields such as resource",
)
@pass_context
def cli(ctx: Context, filter_id: str, prefix: str, selected: str | None) -> None:
    """List suggestions for FILTER_ID starting with PREFIX.

    Namespaces, kinds and resource names come from the [autocomplete]
    section of the configuration.
    """
    try:
        definition = ctx.catalog.get(filter_id)
    except UnknownFilterError as e:
        error(str(e), hint=f"Available: {', '.join(ctx.catalog.ids)}")
        raise SystemExit(EXIT_UNKNOWN_FILTER)

    if selected is not None:
        if definition.check_completion is None:
            error(f"Filter '{filter_id}' has no multi-stage completion")
            raise SystemExit(EXIT_UNKNOWN_FILTER)
        completion = definition.check_completion(prefix, selected)
        state = "complete" if completion.completed else "continue typing"
        console.print(f"{completion.option.value}  [info]({state})[/info]")
        raise SystemExit(EXIT_SUCCESS)

    options = asyncio.run(get_options(definition, prefix))
    if not options:
        info("No suggestion")
        raise SystemExit(EXIT_SUCCESS)

    table = create_table()
    table.add_column("Name", style="filter.value")
    table.add_column("Value")
    for option in options:
        table.add_row(option.name, option.value)
    console.print(table)
    raise SystemExit(EXIT_SUCCESS)
