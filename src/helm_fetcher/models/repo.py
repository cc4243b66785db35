"""Repository and credential models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TLSConfig:
    cert_file: str = ""
    key_file: str = ""
    ca_file: str = ""
    insecure: bool = False


@dataclass(frozen=True)
class Credentials:
    username: str = ""
    password: str = ""

    @classmethod
    def merge(cls, primary: Credentials, fallback: Credentials) -> Credentials:
        """Field-wise merge: unset fields of ``primary`` fall back to ``fallback``."""
        return cls(
            username=primary.username or fallback.username,
            password=primary.password or fallback.password,
        )


@dataclass(frozen=True)
class RepositoryEntry:
    name: str
    url: str = ""
    username: str = ""
    password: str = ""
    cert_file: str = ""
    key_file: str = ""
    ca_file: str = ""
    insecure_skip_tls_verify: bool = False

    @classmethod
    def from_dict(cls, d: dict) -> RepositoryEntry:
        return cls(
            name=d.get("name", "") or "",
            url=d.get("url", "") or "",
            username=d.get("username", "") or "",
            password=d.get("password", "") or "",
            cert_file=d.get("certFile", "") or "",
            key_file=d.get("keyFile", "") or "",
            ca_file=d.get("caFile", "") or "",
            insecure_skip_tls_verify=bool(d.get("insecure_skip_tls_verify", False)),
        )

    @property
    def credentials(self) -> Credentials:
        return Credentials(username=self.username, password=self.password)

    @property
    def tls(self) -> TLSConfig:
        return TLSConfig(
            cert_file=self.cert_file,
            key_file=self.key_file,
            ca_file=self.ca_file,
            insecure=self.insecure_skip_tls_verify,
        )
