"""Data models for Helm Fetcher."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class VerificationStrategy(enum.IntEnum):
    """How much provenance checking a download performs.

    NEVER < IF_POSSIBLE < ALWAYS are ordered by strictness. LATER fetches
    the provenance file but leaves verification to a later step.
    """

    NEVER = 0
    IF_POSSIBLE = 1
    ALWAYS = 2
    LATER = 3

    @property
    def label(self) -> str:
        return self.name.lower().replace("_", "-")

    @classmethod
    def from_str(cls, s: str) -> VerificationStrategy:
        key = s.strip().lower().replace("-", "_")
        for member in cls:
            if member.name.lower() == key:
                return member
        raise ValueError(f"unknown verification strategy: {s!r}")


@dataclass
class Verification:
    signed_by: str = ""
    fingerprint: str = ""
    file_hash: str = ""
    file_name: str = ""

    def __bool__(self) -> bool:
        return bool(self.signed_by or self.file_hash)
