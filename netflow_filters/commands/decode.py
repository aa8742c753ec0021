"""Decode a backend filter fragment."""

from __future__ import annotations

import json

import click

from netflow_filters.cli import Context, pass_context
from netflow_filters.exceptions import QueryParseError
from netflow_filters.filters.compiler import NEGATION_SUFFIX, decode_filters
from netflow_filters.utils.output import console, create_table, error, info

EXIT_SUCCESS = 0
EXIT_PARSE_ERROR = 1


@click.command("decode")
@click.argument("fragment")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format",
)
@pass_context
def cli(ctx: Context, fragment: str, output_format: str) -> None:
    """Show the groups of a backend FRAGMENT, percent-encoded or not."""
    try:
        groups = decode_filters(fragment)
    except QueryParseError as e:
        error(str(e))
        raise SystemExit(EXIT_PARSE_ERROR)

    if output_format == "json":
        click.echo(json.dumps(groups, indent=2))
        raise SystemExit(EXIT_SUCCESS)

    if not groups:
        info("No constraint")
        raise SystemExit(EXIT_SUCCESS)

    table = create_table(title="Any of these groups")
    table.add_column("Group", justify="right")
    table.add_column("Field", style="filter.field")
    table.add_column("Operator")
    table.add_column("Values", style="filter.value")
    for index, group in enumerate(groups, start=1):
        for key, values in group.items():
            negated = key.endswith(NEGATION_SUFFIX)
            field = key[: -len(NEGATION_SUFFIX)] if negated else key
            table.add_row(str(index), field, "!=" if negated else "=", ", ".join(values))
        table.add_section()
    console.print(table)
    raise SystemExit(EXIT_SUCCESS)
