"""Compile filters into the backend filter fragment."""

from __future__ import annotations

from urllib.parse import unquote

import click

from netflow_filters.cli import Context, pass_context
from netflow_filters.commands._filters import EXIT_INVALID, EXIT_SUCCESS, filters_table, load_filters
from netflow_filters.filters.compiler import compile_filters
from netflow_filters.utils.output import console, error, verbose


@click.command("compile")
@click.argument("filters")
@click.option(
    "--match",
    "-m",
    type=click.Choice(["all", "any"]),
    default=None,
    help="Match all filters or any of them (default: from config)",
)
@click.option(
    "--raw",
    is_flag=True,
    default=False,
    help="Print the fragment before percent-encoding",
)
@pass_context
def cli(ctx: Context, filters: str, match: str | None, raw: bool) -> None:
    """Compile FILTERS, written as "id=v1,v2;id2!=v3", for the flow backend.

    \b
    Examples:
      netflow-filters compile "src_namespace=foo"
      netflow-filters compile "namespace=foo;port=80"
      netflow-filters compile --match any "namespace=foo;port=80"
    """
    parsed, errors = load_filters(filters, ctx.catalog)
    if errors:
        for message in errors:
            error(message)
        raise SystemExit(EXIT_INVALID)

    if ctx.verbose:
        console.print(filters_table(parsed))

    mode = match or ctx.config.match
    encoded = compile_filters(parsed, mode)  # type: ignore[arg-type]
    verbose(f"match={mode}")
    console.print(unquote(encoded) if raw else encoded, markup=False, soft_wrap=True)
    raise SystemExit(EXIT_SUCCESS)
