"""hfetch fetch <chart> - Download a chart, optionally verifying its provenance."""

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
from helm_fetcher.config.settings import settings
from helm_fetcher.core.downloader import ChartDownloader
from helm_fetcher.errors import HelmFetcherError
from helm_fetcher.models import VerificationStrategy
from helm_fetcher.output.formatters import output_download

err_console = Console(stderr=True)


def _pick_strategy(strategy: str | None, verify: bool, prov: bool) -> VerificationStrategy:
    if strategy:
        try:
            return VerificationStrategy.from_str(strategy)
        except ValueError as e:
            raise typer.BadParameter(str(e), param_hint="--verify-strategy") from e
    if verify:
        return VerificationStrategy.ALWAYS
    if prov:
        return VerificationStrategy.LATER
    return VerificationStrategy.NEVER


def fetch(
    chart: str = typer.Argument(help="Chart URL or repo/chart reference"),
    version: str = VersionOption,
    destination: Path = typer.Option(Path("."), "--destination", "-d", help="Directory to write the chart to"),
    verify: bool = typer.Option(False, "--verify", help="Verify the chart against its provenance file"),
    prov: bool = typer.Option(False, "--prov", help="Fetch the provenance file, but don't verify it"),
    strategy: Optional[str] = typer.Option(
        None, "--verify-strategy", help="never, if-possible, always or later (overrides --verify/--prov)"
    ),
    keyring: Optional[Path] = typer.Option(None, "--keyring", help="Public keyring used for verification"),
    username: str = UsernameOption,
    password: str = PasswordOption,
    repository_config: Optional[Path] = RepositoryConfigOption,
    repository_cache: Optional[Path] = RepositoryCacheOption,
    output: str = OutputOption,
) -> None:
    """Download a chart from a repository."""
    vs = _pick_strategy(strategy, verify, prov)

    try:
        registry, load_index = repository_sources(repository_config, repository_cache)
        downloader = ChartDownloader(
            registry=registry,
            load_index=load_index,
            verify=vs,
            keyring=str(keyring or settings.keyring),
            username=username,
            password=password,
        )
        path, verification = downloader.download_to(chart, version, destination)
    except HelmFetcherError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    output_download(chart, path, verification, vs, output)
