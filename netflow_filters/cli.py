"""Command-line interface for netflow-filters."""

from __future__ import annotations

import os
from pathlib import Path

import click

from netflow_filters import __version__
from netflow_filters.config import Config, load_config
from netflow_filters.filters.autocomplete import AutocompleteCache
from netflow_filters.filters.catalog import FilterCatalog, build_catalog
from netflow_filters.utils.output import (
    error,
    set_color,
    set_verbosity,
    warning,
)


class Context:
    """Shared context for all commands."""

    def __init__(self) -> None:
        self.config: Config = Config()
        self.cache: AutocompleteCache = AutocompleteCache()
        self._catalog: FilterCatalog | None = None
        self.verbose: bool = False
        self.debug: bool = False
        self.quiet: bool = False

    @property
    def catalog(self) -> FilterCatalog:
        """Catalog bound to this context's cache, built on first use."""
        if self._catalog is None:
            self._catalog = build_catalog(cache=self.cache, max_options=self.config.max_options)
        return self._catalog


pass_context = click.make_pass_decorator(Context, ensure=True)


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=False, path_type=Path),
    help="Path to config file (default: ~/.config/netflow-filters/config.toml)",
)
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug output (implies --verbose)",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    default=False,
    help="Suppress non-error output",
)
@click.version_option(version=__version__, prog_name="netflow-filters")
@click.pass_context
def cli(
    ctx: click.Context,
    config: Path | None,
    no_color: bool,
    verbose: bool,
    debug: bool,
    quiet: bool,
) -> None:
    """netflow-filters: Build network flow queries from console filters.

    Filters are written the way the console stores them in its page URL,
    for instance "namespace=foo;port=80;dst_name!=web".

    Configuration is loaded from ~/.config/netflow-filters/config.toml by default.
    Use --config to specify an alternative configuration file.

    Examples:

        # Compile filters for the flow backend
        netflow-filters compile "namespace=foo;port=80"

        # Check a value before adding it
        netflow-filters validate src_address 10.0.0.0/8
    """
    # Initialize context
    ctx.ensure_object(Context)
    app_ctx = ctx.obj
    app_ctx.verbose = verbose or debug
    app_ctx.debug = debug
    app_ctx.quiet = quiet

    # Configure module-level verbosity for output helpers
    set_verbosity(verbose=verbose, debug=debug)

    # Configure color output: disabled by --no-color, NO_COLOR env, or config
    disable_color = no_color or os.environ.get("NO_COLOR") is not None

    if disable_color:
        set_color(False)

    # Load configuration
    try:
        loaded_config, warnings = load_config(config)
        app_ctx.config = loaded_config
        loaded_config.seed_cache(app_ctx.cache)

        # Apply config settings
        if not disable_color and not loaded_config.colored_output:
            set_color(False)

        # Show warnings unless quiet
        if not quiet:
            for warn in warnings:
                warning(warn)

    except Exception as e:
        error(str(e))
        ctx.exit(1)


@cli.command("help")
@click.argument("command", required=False, nargs=-1)
@click.pass_context
def help_cmd(ctx: click.Context, command: tuple[str, ...]) -> None:
    """Show help for a command."""
    group = cli
    # Resolve subcommand chain
    for name in command:
        cmd = group.get_command(ctx, name)
        if cmd is None:
            error(f"Unknown command: {name}")
            ctx.exit(1)
            return
        if isinstance(cmd, click.Group):
            group = cmd
        else:
            click.echo(cmd.get_help(ctx))
            return
    # Print group help
    click.echo(group.get_help(ctx))


def register_commands() -> None:
    """Register all commands from the commands package."""
    from netflow_filters.commands import discover_commands

    for command in discover_commands():
        cli.add_command(command)


# Register commands on import
register_commands()


def main() -> None:
    cli()
