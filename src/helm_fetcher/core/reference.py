"""Classify chart references as literal URLs or repo/chart shorthand."""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import SplitResult, urlsplit

from helm_fetcher.errors import InvalidReference, MalformedReference
from helm_fetcher.utils.urlutil import is_absolute

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


@dataclass(frozen=True)
class ChartReference:
    raw: str
    parts: SplitResult

    @property
    def absolute(self) -> bool:
        return is_absolute(self.parts)

    def shorthand(self) -> tuple[str, str]:
        """Split ``repo/path/to/chart`` on the first slash."""
        segments = self.parts.path.split("/", 1)
        if len(segments) < 2:
            raise MalformedReference(self.raw)
        return segments[0], segments[1]


def parse_reference(reference: str) -> ChartReference:
    """Parse a reference, rejecting strings that are not valid URLs."""
    if any(ord(c) < 0x20 or ord(c) == 0x7F for c in reference) or _BAD_ESCAPE.search(reference):
        raise InvalidReference(reference)
    try:
        parts = urlsplit(reference)
        # Port parsing is lazy; touch it so a bad port fails here.
        _ = parts.port
    except ValueError as e:
        raise InvalidReference(reference) from e
    return ChartReference(raw=reference, parts=parts)
