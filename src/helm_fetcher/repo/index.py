"""Cached repository index (``<repo>-index.yaml``) access.

An index maps chart names to the versions a repository publishes, each
with one or more candidate download URLs.  Indexes are loaded fresh for
every lookup; nothing is cached between calls.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterator

import yaml
from packaging.specifiers import InvalidSpecifier, SpecifierSet

from helm_fetcher.errors import ChartNotFound, IndexUnavailable, InvalidVersionConstraint
from helm_fetcher.models.chart import ChartVersion
from helm_fetcher.utils.version_compare import greatest_version, parse_version, pep440_version, same_version

logger = logging.getLogger(__name__)

_YamlLoader = getattr(yaml, "CSafeLoader", yaml.SafeLoader)

_SPECIFIER_PREFIXES = ("<", ">", "=", "!", "~")

IndexLoader = Callable[[str], "RepositoryIndex"]


def _newest_first(versions: list[ChartVersion]) -> list[ChartVersion]:
    """Sort by version, newest first; unparsable versions go last."""
    valid = [v for v in versions if parse_version(v.version) is not None]
    invalid = [v for v in versions if parse_version(v.version) is None]
    valid.sort(key=lambda v: parse_version(v.version), reverse=True)
    return valid + invalid


class RepositoryIndex:
    """Read-only snapshot of one repository's index."""

    def __init__(self, entries: dict[str, list[ChartVersion]] | None = None, repo_name: str = ""):
        self.repo_name = repo_name
        self.entries: dict[str, list[ChartVersion]] = {
            name: _newest_first(list(versions)) for name, versions in (entries or {}).items()
        }

    @classmethod
    def from_dict(cls, d: dict, repo_name: str = "") -> RepositoryIndex:
        entries: dict[str, list[ChartVersion]] = {}
        for chart_name, chart_entries in (d.get("entries") or {}).items():
            entries[chart_name] = [
                ChartVersion.from_dict(e, name=chart_name)
                for e in chart_entries or []
                if isinstance(e, dict) and "version" in e
            ]
        return cls(entries, repo_name=repo_name)

    def has(self, chart: str) -> bool:
        return bool(self.entries.get(chart))

    def get(self, chart: str, version: str = "") -> ChartVersion:
        """Select a chart version.

        An empty ``version`` selects the greatest version by SemVer
        precedence, prereleases included. An exact version
        selects that version. A specifier set such as ``>=1.0,<2.0`` selects
        the greatest version it matches.
        """
        versions = self.entries.get(chart)
        if not versions:
            raise ChartNotFound(chart, version, self.repo_name)

        if not version:
            latest = greatest_version(v.version for v in versions)
            if latest is None:
                raise ChartNotFound(chart, version, self.repo_name)
            return next(v for v in versions if v.version == latest)

        for cv in versions:
            if same_version(cv.version, version):
                return cv

        if version.startswith(_SPECIFIER_PREFIXES):
            try:
                spec = SpecifierSet(version)
            except InvalidSpecifier as e:
                raise InvalidVersionConstraint(version) from e
            # Entries are already sorted newest first. SemVer prereleases only
            # match when the specifier itself names a prerelease.
            for cv in versions:
                parsed = parse_version(cv.version)
                candidate = pep440_version(cv.version)
                if parsed is None or candidate is None:
                    continue
                if parsed.prerelease and not spec.prereleases:
                    continue
                if spec.contains(candidate, prereleases=True):
                    return cv

        raise ChartNotFound(chart, version, self.repo_name)

    def iter_urls(self) -> Iterator[str]:
        """Yield every candidate URL of every version of every chart."""
        for versions in self.entries.values():
            for cv in versions:
                yield from cv.urls


def load_index(path: Path, repo_name: str = "") -> RepositoryIndex:
    """Load and parse an index.yaml file.

    Raises IndexUnavailable when the file is missing, unreadable, or does
    not look like an index.
    """
    name = repo_name or path.stem
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise IndexUnavailable(name, str(e)) from e
    try:
        data = yaml.load(text, Loader=_YamlLoader)
    except yaml.YAMLError as e:
        raise IndexUnavailable(name, f"failed to parse {path}") from e

    if not isinstance(data, dict) or not isinstance(data.get("entries"), dict):
        raise IndexUnavailable(name, f"{path} has no entries")

    logger.debug("Loaded index for %s from %s", name, path)
    return RepositoryIndex.from_dict(data, repo_name=name)


class CachedIndexLoader:
    """Loads ``<cache_dir>/<repo>-index.yaml`` on every call."""

    def __init__(self, cache_dir: Path):
        self.cache_dir = cache_dir

    def index_path(self, repo_name: str) -> Path:
        return self.cache_dir / f"{repo_name}-index.yaml"

    def __call__(self, repo_name: str) -> RepositoryIndex:
        return load_index(self.index_path(repo_name), repo_name=repo_name)
