"""Rich panel builders for each command."""

from __future__ import annotations

from pathlib import Path

from rich.panel import Panel
from rich.table import Table

from helm_fetcher.models import Verification, VerificationStrategy
from helm_fetcher.models.chart import ResolvedArtifact
from helm_fetcher.output.themes import styled_strategy, styled_verification


def _kv_table() -> Table:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Key", style="bold cyan", no_wrap=True)
    table.add_column("Value")
    return table


def download_panel(
    reference: str,
    path: Path,
    verification: Verification,
    strategy: VerificationStrategy,
) -> Panel:
    table = _kv_table()
    table.add_row("Chart", reference)
    table.add_row("Saved To", str(path))
    table.add_row("Strategy", styled_strategy(strategy))
    table.add_row("Provenance", styled_verification(verification))
    if verification.signed_by:
        table.add_row("Signed By", verification.signed_by)
    if verification.fingerprint:
        table.add_row("Fingerprint", verification.fingerprint)
    if verification.file_hash:
        table.add_row("Digest", verification.file_hash)
    border = "green" if verification else "blue"
    return Panel(table, title="[bold]Chart Download[/bold]", border_style=border)


def resolution_panel(reference: str, artifact: ResolvedArtifact) -> Panel:
    table = _kv_table()
    table.add_row("Reference", reference)
    table.add_row("URL", artifact.url)
    if artifact.owner is not None:
        table.add_row("Repository", artifact.owner.name)
        table.add_row("Repository URL", artifact.owner.url)
    else:
        table.add_row("Repository", "[yellow](none - no configured repository lists this URL)[/yellow]")
    return Panel(table, title="[bold]Chart Resolution[/bold]", border_style="blue")
