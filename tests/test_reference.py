import pytest

from helm_fetcher.core.reference import parse_reference
from helm_fetcher.errors import InvalidReference, MalformedReference


def test_absolute_url():
    ref = parse_reference("https://example.com/charts/foo-1.2.3.tgz")
    assert ref.absolute


def test_url_without_path_is_not_absolute():
    assert not parse_reference("https://example.com").absolute


def test_shorthand_splits_on_first_slash():
    ref = parse_reference("stable/foo")
    assert not ref.absolute
    assert ref.shorthand() == ("stable", "foo")
    assert parse_reference("stable/nested/foo").shorthand() == ("stable", "nested/foo")


def test_shorthand_without_separator():
    with pytest.raises(MalformedReference, match="repo_name/path_to_chart"):
        parse_reference("foo").shorthand()


@pytest.mark.parametrize("reference", ["http://[::1", "stable/fo%zzo", "stable/foo\n", "https://example.com:99999/x.tgz"])
def test_unparsable_references(reference):
    with pytest.raises(InvalidReference, match="invalid chart URL format"):
        parse_reference(reference)
