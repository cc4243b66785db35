"""Table / JSON / YAML output dispatch."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

import yaml
from rich.console import Console

from helm_fetcher.models import Verification, VerificationStrategy
from helm_fetcher.models.chart import ResolvedArtifact

console = Console()


def _download_to_dict(
    reference: str,
    path: Path,
    verification: Verification,
    strategy: VerificationStrategy,
) -> dict[str, Any]:
    return {
        "chart": reference,
        "path": str(path),
        "strategy": strategy.label,
        "verified": bool(verification),
        "verification": asdict(verification),
    }


def _resolution_to_dict(reference: str, artifact: ResolvedArtifact) -> dict[str, Any]:
    owner = artifact.owner
    return {
        "chart": reference,
        "url": artifact.url,
        "repository": {"name": owner.name, "url": owner.url} if owner else None,
    }


def _emit(data: dict[str, Any], fmt: str) -> bool:
    if fmt == "json":
        console.print_json(json.dumps(data, indent=2))
        return True
    if fmt == "yaml":
        console.print(yaml.dump(data, default_flow_style=False, sort_keys=False))
        return True
    return False


def output_download(
    reference: str,
    path: Path,
    verification: Verification,
    strategy: VerificationStrategy,
    fmt: str,
) -> None:
    if not _emit(_download_to_dict(reference, path, verification, strategy), fmt):
        from helm_fetcher.output.tables import download_panel
        console.print(download_panel(reference, path, verification, strategy))


def output_resolution(reference: str, artifact: ResolvedArtifact, fmt: str) -> None:
    if not _emit(_resolution_to_dict(reference, artifact), fmt):
        from helm_fetcher.output.tables import resolution_panel
        console.print(resolution_panel(reference, artifact))
