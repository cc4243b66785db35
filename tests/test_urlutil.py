"""Tests for URL normalization and relative-URL rebasing."""

from helm_fetcher.utils.urlutil import base_name, resolve_relative, urls_equal


def test_urls_equal_ignores_scheme_and_host_case():
    assert urls_equal("HTTPS://Example.COM/charts/foo-1.0.0.tgz", "https://example.com/charts/foo-1.0.0.tgz")


def test_urls_equal_ignores_default_port_and_trailing_slash():
    assert urls_equal("https://example.com:443/charts/foo-1.0.0.tgz/", "https://example.com/charts/foo-1.0.0.tgz")
    assert urls_equal("https://example.com/charts/./foo-1.0.0.tgz", "https://example.com/charts/foo-1.0.0.tgz")


def test_urls_equal_keeps_path_case_and_port():
    assert not urls_equal("https://example.com/charts/Foo-1.0.0.tgz", "https://example.com/charts/foo-1.0.0.tgz")
    assert not urls_equal("https://example.com:8443/charts/foo.tgz", "https://example.com/charts/foo.tgz")


def test_urls_equal_unparsable_is_never_equal():
    assert not urls_equal("http://[::1", "http://[::1")


def test_resolve_relative_keeps_repository_query():
    got = resolve_relative("https://example.com/repo?token=x", "charts/foo-1.2.3.tgz")
    assert got == "https://example.com/repo/charts/foo-1.2.3.tgz?token=x"


def test_resolve_relative_with_trailing_slash_base():
    got = resolve_relative("https://example.com/repo/", "foo-1.2.3.tgz")
    assert got == "https://example.com/repo/foo-1.2.3.tgz"


def test_resolve_relative_sorts_query_keys():
    got = resolve_relative("https://example.com/repo?b=2&a=1", "foo-1.2.3.tgz")
    assert got == "https://example.com/repo/foo-1.2.3.tgz?a=1&b=2"


def test_resolve_relative_absolute_path_reference():
    got = resolve_relative("https://example.com/repo", "/other/foo-1.2.3.tgz")
    assert got == "https://example.com/other/foo-1.2.3.tgz"


def test_base_name():
    assert base_name("https://example.com/charts/foo-1.2.3.tgz?token=x") == "foo-1.2.3.tgz"
    assert base_name("https://example.com") == ""


def test_urls_equal_treats_empty_path_as_root():
    assert urls_equal("https://example.com", "https://example.com/")
    assert urls_equal("https://example.com/.", "https://example.com")
