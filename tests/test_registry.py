"""Tests for repositories.yaml loading and lookup."""

import pytest

from helm_fetcher.errors import EmptyRepositoryURL, RegistryUnavailable, RepositoryNotFound
from helm_fetcher.models.repo import RepositoryEntry
from helm_fetcher.repo.registry import RepositoryRegistry, load_registry

REPOSITORIES_YAML = """\
apiVersion: v1
generated: "2024-01-01T00:00:00Z"
repositories:
- name: stable
  url: https://example.com/charts
  username: alice
  password: s3cret
  caFile: /etc/ssl/ca.pem
  certFile: /etc/ssl/client.pem
  keyFile: /etc/ssl/client.key
- name: incubator
  url: https://incubator.example.com
  insecure_skip_tls_verify: true
"""


def test_load_registry_preserves_order_and_fields(tmp_path):
    path = tmp_path / "repositories.yaml"
    path.write_text(REPOSITORIES_YAML)

    registry = load_registry(path)

    assert registry.names() == ["stable", "incubator"]
    stable = registry.get("stable")
    assert stable.username == "alice"
    assert stable.password == "s3cret"
    assert stable.tls.ca_file == "/etc/ssl/ca.pem"
    assert stable.tls.cert_file == "/etc/ssl/client.pem"
    assert stable.tls.key_file == "/etc/ssl/client.key"
    assert registry.get("incubator").tls.insecure is True


def test_missing_registry_file_is_empty(tmp_path):
    registry = load_registry(tmp_path / "repositories.yaml")
    assert len(registry) == 0


def test_corrupt_registry_file_raises(tmp_path):
    path = tmp_path / "repositories.yaml"
    path.write_text("repositories: [\n")
    with pytest.raises(RegistryUnavailable):
        load_registry(path)


def test_registry_repositories_must_be_a_list(tmp_path):
    path = tmp_path / "repositories.yaml"
    path.write_text("repositories: stable\n")
    with pytest.raises(RegistryUnavailable):
        load_registry(path)


def test_get_unknown_repository():
    registry = RepositoryRegistry([RepositoryEntry(name="stable", url="https://example.com")])
    with pytest.raises(RepositoryNotFound, match="repo nope not found"):
        registry.get("nope")


def test_get_is_exact_match():
    registry = RepositoryRegistry([RepositoryEntry(name="stable", url="https://example.com")])
    with pytest.raises(RepositoryNotFound):
        registry.get("Stable")


def test_get_repository_without_url():
    registry = RepositoryRegistry([RepositoryEntry(name="stable", url="")])
    with pytest.raises(EmptyRepositoryURL, match="no URL found for repository stable"):
        registry.get("stable")
