"""List the filters that can be used."""

from __future__ import annotations

import click

from netflow_filters.cli import Context, pass_context
from netflow_filters.filters.model import AlwaysMatch, FilterValue
from netflow_filters.utils.output import console, create_table

# Sample value used to reveal the backend fields a definition maps onto
_PROBE = [FilterValue(v="x.y.z")]


def _fields(mapping) -> str:
    return ", ".join(c.field for c in mapping(_PROBE))


@click.command("catalog")
@click.option("--hints", is_flag=True, default=False, help="Show hints and examples")
@pass_context
def cli(ctx: Context, hints: bool) -> None:
    """List filter definitions and the backend fields they map to."""
    table = create_table(title="Filter catalog")
    table.add_column("Id", style="filter.id")
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("Source fields", style="filter.field")
    table.add_column("Destination fields", style="filter.field")
    if hints:
        table.add_column("Hint")

    for definition in ctx.catalog:
        matching = definition.field_matching
        if isinstance(matching, AlwaysMatch):
            src = dst = _fields(matching.always)
        else:
            src = _fields(matching.if_source)
            dst = _fields(matching.if_destination)
        row = [definition.id, definition.name, definition.category.value, src, dst]
        if hints:
            row.append(definition.hint or "")
        table.add_row(*row)

    console.print(table)

    if hints:
        for definition in ctx.catalog:
            if definition.examples:
                console.print(f"\n[filter.id]{definition.id}[/filter.id]")
                console.print(definition.examples, markup=False)
