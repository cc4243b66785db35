"""Chart index and resolution models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from helm_fetcher.models.repo import RepositoryEntry

if TYPE_CHECKING:
    from helm_fetcher.transport import Getter


@dataclass
class ChartVersion:
    name: str = ""
    version: str = ""
    urls: list[str] = field(default_factory=list)
    digest: str = ""
    app_version: str = ""
    description: str = ""
    created: str = ""

    @classmethod
    def from_dict(cls, d: dict, name: str = "") -> ChartVersion:
        return cls(
            name=d.get("name", name) or name,
            version=str(d.get("version", "") or ""),
            urls=[str(u) for u in d.get("urls", []) or []],
            digest=d.get("digest", "") or "",
            app_version=str(d.get("appVersion", "") or ""),
            description=d.get("description", "") or "",
            created=str(d.get("created", "") or ""),
        )


@dataclass
class ResolvedArtifact:
    """A chart URL plus a getter able to fetch it.

    ``owner`` is None when no configured repository lists the URL.
    """

    url: str
    transport: Getter
    owner: RepositoryEntry | None = None

    @property
    def has_owner(self) -> bool:
        return self.owner is not None
