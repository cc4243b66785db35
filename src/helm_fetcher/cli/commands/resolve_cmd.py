"""hfetch resolve <chart> - Show the URL and owner repository for a reference."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from helm_fetcher.cli.options import (
    OutputOption,
    PasswordOption,
    RepositoryCacheOption,
    RepositoryConfigOption,
    UsernameOption,
    VersionOption,
    repository_sources,
)
from helm_fetcher.core.resolver import ChartResolver
from helm_fetcher.errors import HelmFetcherError
from helm_fetcher.output.formatters import output_resolution

err_console = Console(stderr=True)


def resolve(
    chart: str = typer.Argument(help="Chart URL or repo/chart reference"),
    version: str = VersionOption,
    username: str = UsernameOption,
    password: str = PasswordOption,
    repository_config: Optional[Path] = RepositoryConfigOption,
    repository_cache: Optional[Path] = RepositoryCacheOption,
    output: str = OutputOption,
) -> None:
    """Resolve a chart reference without downloading it."""
    try:
        registry, load_index = repository_sources(repository_config, repository_cache)
        resolver = ChartResolver(registry, load_index, username=username, password=password)
        artifact = resolver.resolve(chart, version)
    except HelmFetcherError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    output_resolution(chart, artifact, output)
