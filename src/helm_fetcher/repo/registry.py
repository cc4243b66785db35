"""Repository registry loaded from Helm's repositories.yaml."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator

import yaml

from helm_fetcher.errors import EmptyRepositoryURL, RegistryUnavailable, RepositoryNotFound
from helm_fetcher.models.repo import RepositoryEntry

logger = logging.getLogger(__name__)

# Prefer the C-accelerated YAML loader when available.
_YamlLoader = getattr(yaml, "CSafeLoader", yaml.SafeLoader)


class RepositoryRegistry:
    """Ordered, read-only list of configured repositories."""

    def __init__(self, entries: Iterable[RepositoryEntry] = ()):
        self._entries = tuple(entries)

    def __iter__(self) -> Iterator[RepositoryEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def names(self) -> list[str]:
        return [e.name for e in self._entries]

    def get(self, name: str) -> RepositoryEntry:
        """Look up a repository by exact name.

        Raises RepositoryNotFound, or EmptyRepositoryURL when the entry has
        no URL configured.
        """
        for entry in self._entries:
            if entry.name == name:
                if not entry.url:
                    raise EmptyRepositoryURL(name)
                return entry
        raise RepositoryNotFound(name)


def load_registry(path: Path) -> RepositoryRegistry:
    """Load repositories.yaml.

    A missing file means no repositories are configured. A file that
    exists but cannot be read or parsed is an error.
    """
    if not path.exists():
        logger.debug("No repositories file at %s", path)
        return RepositoryRegistry()
    try:
        data = yaml.load(path.read_text(encoding="utf-8"), Loader=_YamlLoader)
    except (OSError, yaml.YAMLError) as e:
        raise RegistryUnavailable(path, str(e)) from e

    if not data:
        return RepositoryRegistry()
    if not isinstance(data, dict):
        raise RegistryUnavailable(path, "expected a mapping at the top level")

    repos = data.get("repositories") or []
    if not isinstance(repos, list):
        raise RegistryUnavailable(path, "'repositories' must be a list")

    entries = [RepositoryEntry.from_dict(r) for r in repos if isinstance(r, dict) and r.get("name")]
    logger.debug("Loaded %d repositories from %s", len(entries), path)
    return RepositoryRegistry(entries)
