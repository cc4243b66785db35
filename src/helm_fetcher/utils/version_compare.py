"""Semver comparison utilities."""

from __future__ import annotations

from typing import Iterable

import semver
from packaging.version import InvalidVersion
from packaging.version import Version as Pep440Version


def parse_version(v: str) -> semver.Version | None:
    """Parse a SemVer 2.0 version string, returning None on failure.

    A leading 'v' is tolerated and minor/patch may be omitted (``v1.2``).
    """
    text = v[1:] if v.startswith("v") else v
    try:
        return semver.Version.parse(text, optional_minor_and_patch=True)
    except (ValueError, TypeError):
        return None


def pep440_version(v: str) -> Pep440Version | None:
    """Parse for specifier matching (``>=1.0,<2.0``), returning None on failure."""
    try:
        return Pep440Version(v)
    except InvalidVersion:
        return None


def same_version(a: str, b: str) -> bool:
    """True if both strings name the same version (``v1.2.0`` == ``1.2.0``)."""
    if a == b:
        return True
    va = parse_version(a)
    vb = parse_version(b)
    if va is None or vb is None:
        return False
    return va.compare(vb) == 0


def greatest_version(versions: Iterable[str]) -> str | None:
    """Return the greatest version by SemVer precedence, or None.

    Unparsable strings are ignored. On ties the first one listed wins.
    """
    best: str | None = None
    best_parsed: semver.Version | None = None
    for v in versions:
        parsed = parse_version(v)
        if parsed is None:
            continue
        if best_parsed is None or parsed > best_parsed:
            best, best_parsed = v, parsed
    return best
