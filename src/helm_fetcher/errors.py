"""Exception hierarchy for chart resolution and acquisition."""

from __future__ import annotations

from pathlib import Path

from helm_fetcher.models import Verification

_REFRESH_HINT = "(try 'helm repo update')"


class HelmFetcherError(Exception):
    """Base exception for all helm-fetcher errors."""

    pass


# -- Malformed input ---------------------------------------------------------


class InvalidReference(HelmFetcherError):
    """Raised when a chart reference cannot be parsed as a URL."""

    def __init__(self, reference: str):
        self.reference = reference
        super().__init__(f"invalid chart URL format: {reference}")


class MalformedReference(HelmFetcherError):
    """Raised when a non-absolute reference is not of the form repo/chart."""

    def __init__(self, reference: str):
        self.reference = reference
        super().__init__(
            f"non-absolute URLs should be in form of repo_name/path_to_chart, got: {reference}"
        )


class InvalidVersionConstraint(HelmFetcherError):
    def __init__(self, constraint: str):
        self.constraint = constraint
        super().__init__(f"invalid version constraint: {constraint!r}")


# -- Lookup failures ---------------------------------------------------------


class RegistryUnavailable(HelmFetcherError):
    """Raised when the repositories file exists but cannot be read."""

    def __init__(self, path: Path | str, reason: str = ""):
        self.path = Path(path)
        message = f"couldn't load repositories file {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class RepositoryNotFound(HelmFetcherError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"repo {name} not found")


class EmptyRepositoryURL(HelmFetcherError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"no URL found for repository {name}")


class IndexUnavailable(HelmFetcherError):
    """Raised when a repository's cached index is missing or corrupt."""

    def __init__(self, repo_name: str, reason: str = ""):
        self.repo_name = repo_name
        detail = f": {reason}" if reason else ""
        super().__init__(f"no cached repo found for {repo_name}{detail}. {_REFRESH_HINT}")


class ChartNotFound(HelmFetcherError):
    def __init__(self, chart: str, version: str = "", repo_name: str = ""):
        self.chart = chart
        self.version = version
        self.repo_name = repo_name
        constraint = version or "latest"
        where = f" in {repo_name} index" if repo_name else ""
        super().__init__(f"chart {chart!r} matching {constraint} not found{where}. {_REFRESH_HINT}")


class NoDownloadURL(HelmFetcherError):
    def __init__(self, reference: str):
        self.reference = reference
        super().__init__(f"chart {reference!r} has no downloadable URLs")


class NoOwnerRepository(HelmFetcherError):
    """No configured repository lists the given URL in its index.

    Charts do not have to appear in an index to be valid, so this is a
    recoverable outcome of the owner scan, not a failure of resolution.
    """

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"could not find a repo containing the given URL: {url}")


# -- Transport ---------------------------------------------------------------


class UnsupportedScheme(HelmFetcherError):
    def __init__(self, scheme: str, url: str = ""):
        self.scheme = scheme
        self.url = url
        super().__init__(f"no getter registered for scheme {scheme!r} (url: {url})")


class TransportError(HelmFetcherError):
    """Raised when fetching a URL fails for any reason."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"failed to fetch {url}: {reason}")


class ProvenanceFetchError(HelmFetcherError):
    def __init__(self, reference: str, url: str):
        self.reference = reference
        self.url = url
        super().__init__(f"failed to fetch provenance {url!r} for {reference}")


# -- Persistence and verification -------------------------------------------


class ArtifactWriteError(HelmFetcherError):
    """Raised when a downloaded file cannot be written.

    ``path`` is the destination that was being written, which may hold a
    partial file.
    """

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"failed to write {path}: {reason}")


class VerificationError(HelmFetcherError):
    """Raised when a chart fails provenance verification.

    ``verification`` holds whatever was established before the failure
    (e.g. the signer when only the digest mismatched).
    """

    def __init__(self, message: str, verification: Verification | None = None):
        self.verification = verification if verification is not None else Verification()
        super().__init__(message)
