"""Shared CLI options."""

from __future__ import annotations

from pathlib import Path

import typer

from helm_fetcher.config.settings import settings
from helm_fetcher.repo.index import CachedIndexLoader
from helm_fetcher.repo.registry import RepositoryRegistry, load_registry

OutputOption = typer.Option(settings.default_output, "--output", "-o", help="Output format: table, json, yaml")
VersionOption = typer.Option("", "--version", help="Chart version constraint (default: latest)")
RepositoryConfigOption = typer.Option(None, "--repository-config", help="Path to repositories.yaml")
RepositoryCacheOption = typer.Option(None, "--repository-cache", help="Directory holding cached <repo>-index.yaml files")
UsernameOption = typer.Option("", "--username", help="Chart repository username (overrides the repository's)")
PasswordOption = typer.Option("", "--password", help="Chart repository password (overrides the repository's)")


def repository_sources(
    repository_config: Path | None,
    repository_cache: Path | None,
) -> tuple[RepositoryRegistry, CachedIndexLoader]:
    """Load the registry and build an index loader, defaulting to Helm's own paths."""
    registry = load_registry(repository_config or settings.repositories_file)
    return registry, CachedIndexLoader(repository_cache or settings.index_cache_dir)
