"""Resolve chart references to a download URL and a bound getter."""

from __future__ import annotations

import logging

from helm_fetcher.core.owner_scanner import find_owner
from helm_fetcher.core.reference import ChartReference, parse_reference
from helm_fetcher.errors import ChartNotFound, NoDownloadURL, NoOwnerRepository
from helm_fetcher.models.chart import ResolvedArtifact
from helm_fetcher.models.repo import Credentials, RepositoryEntry
from helm_fetcher.repo.index import IndexLoader
from helm_fetcher.repo.registry import RepositoryRegistry
from helm_fetcher.transport import Providers, default_providers
from helm_fetcher.utils.urlutil import resolve_relative

logger = logging.getLogger(__name__)


class ChartResolver:
    """Turns a chart reference plus optional version into a ResolvedArtifact.

    A reference is either a literal URL (``https://host/charts/foo-1.0.0.tgz``)
    or ``repo_name/chart_name``. Literal URLs ignore the version.
    """

    def __init__(
        self,
        registry: RepositoryRegistry,
        load_index: IndexLoader,
        providers: Providers | None = None,
        username: str = "",
        password: str = "",
    ):
        self.registry = registry
        self.load_index = load_index
        self.providers = providers or default_providers()
        self.username = username
        self.password = password

    def credentials_for(self, entry: RepositoryEntry | None) -> Credentials:
        """Caller credentials first; unset fields fall back to the repository's."""
        caller = Credentials(username=self.username, password=self.password)
        if entry is None:
            return caller
        return Credentials.merge(caller, entry.credentials)

    def resolve(self, reference: str, version: str = "") -> ResolvedArtifact:
        ref = parse_reference(reference)
        if ref.absolute:
            return self._resolve_literal(ref)
        return self._resolve_shorthand(ref, version)

    def _resolve_literal(self, ref: ChartReference) -> ResolvedArtifact:
        # Look for a repository listing this URL so its credentials and TLS
        # settings apply.
        try:
            owner = find_owner(ref.raw, self.registry, self.load_index)
        except NoOwnerRepository:
            logger.debug("No configured repository lists %s; using defaults", ref.raw)
            getter = self.providers.new_getter(ref.raw, self.credentials_for(None))
            return ResolvedArtifact(url=ref.raw, transport=getter, owner=None)

        getter = self.providers.new_getter(ref.raw, self.credentials_for(owner), owner.tls)
        return ResolvedArtifact(url=ref.raw, transport=getter, owner=owner)

    def _resolve_shorthand(self, ref: ChartReference, version: str) -> ResolvedArtifact:
        repo_name, chart_name = ref.shorthand()
        entry = self.registry.get(repo_name)
        index = self.load_index(entry.name)

        try:
            chart = index.get(chart_name, version)
        except ChartNotFound as e:
            raise ChartNotFound(chart_name, version, entry.name) from e

        if not chart.urls:
            raise NoDownloadURL(ref.raw)

        # Only the first listed URL is used, even when mirrors are listed.
        candidate = parse_reference(chart.urls[0])
        creds = self.credentials_for(entry)

        if not candidate.parts.scheme:
            url = resolve_relative(entry.url, candidate.raw)
            getter = self.providers.new_getter(entry.url, creds, entry.tls)
        else:
            url = candidate.raw
            getter = self.providers.new_getter(url, creds, entry.tls)

        logger.debug("Resolved %s@%s to %s via %s", ref.raw, chart.version, url, entry.name)
        return ResolvedArtifact(url=url, transport=getter, owner=entry)
