"""URL helpers: normalized equality and relative-URL rebasing."""

from __future__ import annotations

import posixpath
from urllib.parse import SplitResult, parse_qsl, urlencode, urljoin, urlsplit, urlunsplit

_DEFAULT_PORTS = {"http": 80, "https": 443}


def is_absolute(parts: SplitResult) -> bool:
    """True for a literal artifact location: scheme, host and a path are all present."""
    return bool(parts.scheme and parts.netloc and parts.path)


def _clean_path(path: str) -> str:
    if not path:
        return "/"
    cleaned = posixpath.normpath(path)
    if cleaned == ".":
        return "/"
    return cleaned.rstrip("/") or "/"


def _normalize(url: str) -> tuple[str, str, str, str, str]:
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    host = (parts.hostname or "").lower()
    netloc = host
    if parts.port is not None and parts.port != _DEFAULT_PORTS.get(scheme):
        netloc = f"{host}:{parts.port}"
    if parts.username or parts.password:
        netloc = f"{parts.username or ''}:{parts.password or ''}@{netloc}"
    return scheme, netloc, _clean_path(parts.path), parts.query, parts.fragment


def urls_equal(a: str, b: str) -> bool:
    """Compare two URLs after normalizing scheme, host, port and path.

    Scheme and host compare case-insensitively, a default port equals no
    port, and ``/charts/x.tgz/`` equals ``/charts/./x.tgz``. The path itself
    stays case-sensitive. Unparsable input never equals anything.
    """
    try:
        return _normalize(a) == _normalize(b)
    except ValueError:
        return False


def _encode_query(query: str) -> str:
    pairs = parse_qsl(query, keep_blank_values=True)
    return urlencode(sorted(pairs, key=lambda kv: kv[0]))


def resolve_relative(base_url: str, ref: str) -> str:
    """Resolve ``ref`` against a repository base URL.

    The base path always gets exactly one trailing slash so the last path
    segment is kept, and the base URL's query parameters are re-applied to
    the result (keys sorted).
    """
    base = urlsplit(base_url)
    base_path = base.path.rstrip("/") + "/"
    joined = urlsplit(urljoin(urlunsplit((base.scheme, base.netloc, base_path, "", "")), ref))
    return urlunsplit((joined.scheme, joined.netloc, joined.path, _encode_query(base.query), joined.fragment))


def base_name(url: str) -> str:
    """Last segment of the URL path (``""`` when the path is empty)."""
    path = urlsplit(url).path.rstrip("/")
    return posixpath.basename(path)
