from helm_fetcher.utils.version_compare import greatest_version, parse_version, same_version


def test_parse_version_strips_leading_v():
    assert parse_version("v1.2.3") == parse_version("1.2.3")
    assert parse_version("not-a-version") is None


def test_greatest_version_uses_semantic_ordering():
    assert greatest_version(["1.2.3", "1.10.0", "1.9.0"]) == "1.10.0"


def test_greatest_version_skips_unparsable():
    assert greatest_version(["garbage", "0.1.0"]) == "0.1.0"
    assert greatest_version(["garbage"]) is None
    assert greatest_version([]) is None


def test_same_version():
    assert same_version("v1.2.3", "1.2.3")
    assert same_version("1.2.3-beta.1", "1.2.3-beta.1")
    assert not same_version("1.2.3", "1.2.4")


def test_greatest_version_follows_semver_prerelease_rules():
    assert greatest_version(["1.0.0-1", "1.0.0"]) == "1.0.0"
    assert greatest_version(["1.0.0", "1.1.0-SNAPSHOT"]) == "1.1.0-SNAPSHOT"
    assert greatest_version(["1.0.0-alpha.1", "1.0.0-alpha.beta"]) == "1.0.0-alpha.beta"


def test_parse_version_allows_short_versions():
    assert parse_version("v1.2") == parse_version("1.2.0")
