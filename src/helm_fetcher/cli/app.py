"""Root Typer application, mounts sub-commands."""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

app = typer.Typer(
    name="hfetch",
    help="Helm Fetcher - Resolve, download and verify Helm charts.",
    no_args_is_help=True,
)


@app.callback()
def _root(
    debug: bool = typer.Option(False, "--debug", help="Enable verbose output"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False, show_time=False)],
        force=True,
    )


def _register_commands() -> None:
    from helm_fetcher.cli.commands.fetch_cmd import fetch
    from helm_fetcher.cli.commands.resolve_cmd import resolve

    # Plain commands, so options may follow the chart argument.
    app.command(name="fetch", help="Download a chart and optionally verify it")(fetch)
    app.command(name="resolve", help="Show where a chart reference resolves to")(resolve)


_register_commands()


def main() -> None:
    app()
