"""Build the request parameters of a flow query."""

from __future__ import annotations

import json

import click

from netflow_filters.cli import Context, pass_context
from netflow_filters.commands._filters import EXIT_INVALID, EXIT_SUCCESS, load_filters
from netflow_filters.filters.query import build_export_query, build_flow_query
from netflow_filters.filters.router import TimeRange, build_url_params
from netflow_filters.utils.output import error


@click.command("query")
@click.argument("filters", default="")
@click.option("--match", "-m", type=click.Choice(["all", "any"]), default=None)
@click.option(
    "--reporter",
    "-r",
    type=click.Choice(["source", "destination", "both"]),
    default=None,
)
@click.option("--limit", "-n", type=int, default=None, help="Maximum number of flows")
@click.option("--range", "time_range", type=int, default=None, help="Last N seconds")
@click.option("--start", type=int, default=None, help="Start time (epoch seconds)")
@click.option("--end", type=int, default=None, help="End time (epoch seconds)")
@click.option(
    "--export",
    "export_columns",
    default=None,
    help="Build a CSV export query with these comma-separated columns",
)
@click.option("--url", "as_url", is_flag=True, default=False, help="Print page URL parameters")
@pass_context
def cli(
    ctx: Context,
    filters: str,
    match: str | None,
    reporter: str | None,
    limit: int | None,
    time_range: int | None,
    start: int | None,
    end: int | None,
    export_columns: str | None,
    as_url: bool,
) -> None:
    """Print the backend parameters (or page URL parameters) for FILTERS as JSON."""
    parsed, errors = load_filters(filters, ctx.catalog)
    if errors:
        for message in errors:
            error(message)
        raise SystemExit(EXIT_INVALID)

    config = ctx.config
    if start is not None and end is not None:
        query_range: int | TimeRange = TimeRange(start=start, end=end)
    else:
        query_range = time_range or config.time_range

    options = {
        "match": match or config.match,
        "range": query_range,
        "reporter": reporter or config.reporter,
        "limit": limit or config.limit,
    }

    if as_url:
        params = build_url_params(parsed, **options)
    else:
        flow_query = build_flow_query(parsed, **options)
        if export_columns is not None:
            columns = [c.strip() for c in export_columns.split(",") if c.strip()]
            params = build_export_query(flow_query, columns).to_params()
        else:
            params = flow_query.to_params()

    click.echo(json.dumps(params, indent=2))
    raise SystemExit(EXIT_SUCCESS)
