"""Shared fixtures: an in-memory network, registry and index loader."""

from __future__ import annotations

import hashlib

import pytest

from helm_fetcher.core.provenance import check_digest
from helm_fetcher.errors import IndexUnavailable, TransportError
from helm_fetcher.models import Verification
from helm_fetcher.models.chart import ChartVersion
from helm_fetcher.models.repo import RepositoryEntry, TLSConfig
from helm_fetcher.repo.index import RepositoryIndex
from helm_fetcher.repo.registry import RepositoryRegistry
from helm_fetcher.transport import Providers

SIGNER = "Helm Testing <helm-testing@example.com>"


class FakeGetter:
    def __init__(self, url: str, tls: TLSConfig, network: FakeNetwork):
        self.url = url
        self.tls = tls
        self.network = network
        self.username = ""
        self.password = ""

    def set_credentials(self, username: str, password: str) -> None:
        self.username = username
        self.password = password

    def get(self, url: str) -> bytes:
        self.network.calls.append(url)
        if url not in self.network.responses:
            raise TransportError(url, "404 Not Found")
        return self.network.responses[url]


class FakeNetwork:
    """Serves canned responses and records every fetched URL."""

    def __init__(self):
        self.responses: dict[str, bytes] = {}
        self.calls: list[str] = []
        self.getters: list[FakeGetter] = []

    def _make(self, url: str, tls: TLSConfig) -> FakeGetter:
        getter = FakeGetter(url, tls, self)
        self.getters.append(getter)
        return getter

    def providers(self) -> Providers:
        return Providers({"http": self._make, "https": self._make})


class FakeSignatory:
    """Skips the PGP check but still compares digests."""

    def __init__(self, signer: str = SIGNER):
        self.signer = signer

    def verify(self, archive, prov):
        return check_digest(archive, prov.read_text(encoding="utf-8"), Verification(signed_by=self.signer))


def make_provenance(archive_name: str, data: bytes) -> str:
    digest = "sha256:" + hashlib.sha256(data).hexdigest()
    return (
        "-----BEGIN PGP SIGNED MESSAGE-----\n"
        "Hash: SHA512\n"
        "\n"
        "apiVersion: v1\n"
        "description: A Helm chart for testing\n"
        "name: foo\n"
        "version: 1.2.3\n"
        "\n"
        "...\n"
        "files:\n"
        f"  {archive_name}: {digest}\n"
        "-----BEGIN PGP SIGNATURE-----\n"
        "\n"
        "wsBcBAEBCgAQBQJbAAAAAAkQAAAAAAAAAAAAAA==\n"
        "-----END PGP SIGNATURE-----\n"
    )


def dict_loader(indexes: dict[str, RepositoryIndex]):
    def load(repo_name: str) -> RepositoryIndex:
        if repo_name not in indexes:
            raise IndexUnavailable(repo_name)
        return indexes[repo_name]

    return load


@pytest.fixture
def network() -> FakeNetwork:
    return FakeNetwork()


@pytest.fixture
def registry() -> RepositoryRegistry:
    return RepositoryRegistry([
        RepositoryEntry(name="stable", url="https://example.com/charts", username="repo-user", password="repo-pass"),
        RepositoryEntry(
            name="private",
            url="https://private.example.com/repo?token=x",
            username="priv-user",
            password="priv-pass",
            ca_file="/etc/ssl/private-ca.pem",
        ),
        RepositoryEntry(name="mirror", url="https://mirror.example.com/charts"),
    ])


@pytest.fixture
def indexes() -> dict[str, RepositoryIndex]:
    return {
        "stable": RepositoryIndex({
            "foo": [
                ChartVersion(name="foo", version="1.2.3", urls=["https://example.com/charts/foo-1.2.3.tgz"]),
                ChartVersion(name="foo", version="1.10.0", urls=["https://example.com/charts/foo-1.10.0.tgz"]),
                ChartVersion(name="foo", version="1.9.0", urls=["https://example.com/charts/foo-1.9.0.tgz"]),
            ],
            "bar": [
                ChartVersion(
                    name="bar",
                    version="0.1.0",
                    urls=["https://cdn.example.com/bar-0.1.0.tgz", "https://example.com/charts/bar-0.1.0.tgz"],
                ),
            ],
            "empty": [ChartVersion(name="empty", version="0.0.1", urls=[])],
        }, repo_name="stable"),
        "private": RepositoryIndex({
            "foo": [ChartVersion(name="foo", version="1.2.3", urls=["charts/foo-1.2.3.tgz"])],
        }, repo_name="private"),
        "mirror": RepositoryIndex({
            # Same URL as stable/bar's first mirror; stable comes first in the registry.
            "bar": [ChartVersion(name="bar", version="0.1.0", urls=["https://cdn.example.com/bar-0.1.0.tgz"])],
            "baz": [ChartVersion(name="baz", version="2.0.0", urls=["https://mirror.example.com/charts/baz-2.0.0.tgz"])],
        }, repo_name="mirror"),
    }


@pytest.fixture
def load_index(indexes):
    return dict_loader(indexes)
