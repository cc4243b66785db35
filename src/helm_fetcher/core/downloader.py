"""Download charts and apply the configured verification strategy."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import urlsplit, urlunsplit

from helm_fetcher.core.provenance import PROVENANCE_SUFFIX, Signatory, SignatoryLoader, verify_chart
from helm_fetcher.core.resolver import ChartResolver
from helm_fetcher.errors import ArtifactWriteError, ProvenanceFetchError, TransportError
from helm_fetcher.models import Verification, VerificationStrategy
from helm_fetcher.models.chart import ResolvedArtifact
from helm_fetcher.repo.index import IndexLoader
from helm_fetcher.repo.registry import RepositoryRegistry
from helm_fetcher.transport import Providers, default_providers
from helm_fetcher.utils.urlutil import base_name

logger = logging.getLogger(__name__)


def provenance_url(chart_url: str) -> str:
    """``.../foo-1.0.0.tgz?x=y`` -> ``.../foo-1.0.0.tgz.prov?x=y``"""
    parts = urlsplit(chart_url)
    return urlunsplit(parts._replace(path=parts.path + PROVENANCE_SUFFIX))


def _write_file(path: Path, data: bytes) -> None:
    try:
        path.write_bytes(data)
    except OSError as e:
        raise ArtifactWriteError(path, str(e)) from e
    logger.info("Saved %s (%d bytes)", path, len(data))


@dataclass
class ChartDownloader:
    """Resolves, downloads and optionally verifies charts.

    ``username``/``password`` override a repository's configured
    credentials field by field. Registry and index data are read fresh on
    every call.
    """

    registry: RepositoryRegistry
    load_index: IndexLoader
    verify: VerificationStrategy = VerificationStrategy.NEVER
    keyring: str = ""
    username: str = ""
    password: str = ""
    providers: Providers = field(default_factory=default_providers)
    load_signatory: SignatoryLoader = Signatory.from_keyring

    def _resolver(self) -> ChartResolver:
        return ChartResolver(
            registry=self.registry,
            load_index=self.load_index,
            providers=self.providers,
            username=self.username,
            password=self.password,
        )

    def resolve_chart_version(self, reference: str, version: str = "") -> ResolvedArtifact:
        """Resolve ``reference`` to a URL and a getter able to fetch it.

        The version is ignored for literal URLs. For ``repo/chart`` an empty
        version means the latest one.
        """
        return self._resolver().resolve(reference, version)

    def download_to(self, reference: str, version: str, dest: Path | str) -> tuple[Path, Verification]:
        """Download a chart into ``dest``, fetching and checking provenance per ``verify``.

        NEVER:       no provenance fetch, empty Verification.
        IF_POSSIBLE: a missing provenance file logs a warning and returns an
                     empty Verification; a failed check raises.
        ALWAYS:      a missing provenance file or a failed check raises.
        LATER:       the provenance file is saved when available, never checked.

        Files are written as ``dest/<remote base name>`` and overwritten if
        present. On a write failure ArtifactWriteError carries the path.
        """
        artifact = self.resolve_chart_version(reference, version)

        data = artifact.transport.get(artifact.url)

        dest_file = Path(dest) / base_name(artifact.url)
        _write_file(dest_file, data)

        if self.verify == VerificationStrategy.NEVER:
            return dest_file, Verification()

        prov_url = provenance_url(artifact.url)
        try:
            body = artifact.transport.get(prov_url)
        except TransportError as e:
            if self.verify == VerificationStrategy.ALWAYS:
                raise ProvenanceFetchError(reference, prov_url) from e
            logger.warning("Verification not found for %s: %s", reference, e)
            return dest_file, Verification()

        _write_file(dest_file.with_name(dest_file.name + PROVENANCE_SUFFIX), body)

        if self.verify == VerificationStrategy.LATER:
            return dest_file, Verification()

        # Any failure past this point is fatal, whatever the strategy.
        verification = verify_chart(dest_file, self.keyring, self.load_signatory)
        return dest_file, verification
