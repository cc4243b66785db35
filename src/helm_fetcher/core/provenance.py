"""Provenance verification for packaged charts.

A provenance file (``<chart>.tgz.prov``) is a PGP clear-signed document.
The signed body holds the chart metadata as YAML, a ``...`` separator,
then a ``files:`` mapping of archive name to ``sha256:<hex>`` digest.
"""

from __future__ import annotations

import hashlib
import logging
import stat
from pathlib import Path
from typing import Callable

import gnupg
import yaml

from helm_fetcher.errors import VerificationError
from helm_fetcher.models import Verification

logger = logging.getLogger(__name__)

PROVENANCE_SUFFIX = ".prov"

_SIGNED_HEADER = "-----BEGIN PGP SIGNED MESSAGE-----"
_SIGNATURE_START = "-----BEGIN PGP SIGNATURE-----"


def is_tar(path: Path) -> bool:
    """Extension check only; the archive format is validated on unpack."""
    return path.suffix.lower() == ".tgz"


def digest_file(path: Path) -> str:
    """Return ``sha256:<hex>`` for a file."""
    sha = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(65536), b""):
            sha.update(chunk)
    return f"sha256:{sha.hexdigest()}"


def _signed_body(text: str) -> str:
    lines = text.splitlines()
    try:
        start = lines.index(_SIGNED_HEADER)
    except ValueError:
        raise VerificationError("provenance file is not PGP clear-signed") from None

    # Skip armor headers ("Hash: SHA512") up to the first blank line.
    i = start + 1
    while i < len(lines) and lines[i].strip():
        i += 1

    try:
        end = lines.index(_SIGNATURE_START, i)
    except ValueError:
        raise VerificationError("provenance file has no signature block") from None

    # Undo dash-escaping
    body = [line[2:] if line.startswith("- ") else line for line in lines[i + 1:end]]
    return "\n".join(body)


def parse_provenance(text: str) -> tuple[dict, dict[str, str]]:
    """Split a provenance document into (chart metadata, files)."""
    body = _signed_body(text)
    meta_text, sep, files_text = body.partition("\n...\n")
    if not sep:
        raise VerificationError("provenance file has no files section")
    try:
        metadata = yaml.safe_load(meta_text) or {}
        files_block = yaml.safe_load(files_text) or {}
    except yaml.YAMLError as e:
        raise VerificationError(f"malformed provenance file: {e}") from e
    if not isinstance(metadata, dict) or not isinstance(files_block, dict):
        raise VerificationError("malformed provenance file")
    files = files_block.get("files") or {}
    return metadata, {str(k): str(v) for k, v in files.items()}


class Signatory:
    """Checks provenance signatures against a public keyring."""

    def __init__(self, gpg: gnupg.GPG):
        self._gpg = gpg

    @classmethod
    def from_keyring(cls, keyring: str | Path) -> Signatory:
        path = Path(keyring)
        if not path.is_file():
            raise VerificationError(f"failed to load keyring: {path} does not exist")
        try:
            gpg = gnupg.GPG(keyring=str(path))
            keys = gpg.list_keys()
        except (OSError, ValueError) as e:
            raise VerificationError(f"failed to load keyring {path}: {e}") from e
        if not keys:
            raise VerificationError(f"failed to load keyring: no public keys in {path}")
        return cls(gpg)

    def verify(self, archive: Path, prov: Path) -> Verification:
        try:
            text = prov.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise VerificationError(f"malformed provenance file {prov}: {e}") from e
        except OSError as e:
            raise VerificationError(f"could not load provenance file {prov}: {e}") from e

        result = self._gpg.verify(text)
        if not result.valid:
            raise VerificationError(f"signature verification failed for {prov}: {result.status}")

        ver = Verification(
            signed_by=result.username or result.key_id or "",
            fingerprint=result.fingerprint or "",
        )
        return check_digest(archive, text, ver)


def check_digest(archive: Path, provenance_text: str, ver: Verification) -> Verification:
    """Compare the archive digest with the one recorded in the provenance body."""
    _, files = parse_provenance(provenance_text)
    name = archive.name
    expected = files.get(name)
    if expected is None:
        raise VerificationError(f"provenance file does not list {name}", ver)

    ver.file_name = name
    actual = digest_file(archive)
    if expected != actual:
        raise VerificationError(f"sha256 sum does not match for {name}: {expected!r} != {actual!r}", ver)
    ver.file_hash = actual
    logger.debug("Verified %s signed by %s", name, ver.signed_by)
    return ver


SignatoryLoader = Callable[[str], Signatory]


def verify_chart(path: Path, keyring: str, load_signatory: SignatoryLoader = Signatory.from_keyring) -> Verification:
    """Verify a packaged chart against ``<path>.prov`` using ``keyring``."""
    path = Path(path)
    try:
        st = path.stat()
    except OSError as e:
        raise VerificationError(f"cannot verify {path}: {e}") from e
    if stat.S_ISDIR(st.st_mode):
        raise VerificationError("unpacked charts cannot be verified")
    if not is_tar(path):
        raise VerificationError("chart must be a tgz file")

    prov = path.with_name(path.name + PROVENANCE_SUFFIX)
    try:
        prov.stat()
    except OSError as e:
        raise VerificationError(f"could not load provenance file {prov}: {e}") from e

    signatory = load_signatory(keyring)
    return signatory.verify(path, prov)
