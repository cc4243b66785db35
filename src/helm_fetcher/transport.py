"""Pluggable getters, keyed by URL scheme."""

from __future__ import annotations

import logging
import ssl
from typing import Callable, Iterable, Protocol
from urllib.parse import urlsplit

import httpx

from helm_fetcher import __version__
from helm_fetcher.errors import TransportError, UnsupportedScheme
from helm_fetcher.models.repo import Credentials, TLSConfig

logger = logging.getLogger(__name__)

USER_AGENT = f"helm-fetcher/{__version__}"


class Getter(Protocol):
    """Anything that can fetch the bytes behind a URL."""

    def get(self, url: str) -> bytes: ...

    def set_credentials(self, username: str, password: str) -> None: ...


GetterConstructor = Callable[[str, TLSConfig], Getter]


class HTTPGetter:
    """HTTP(S) getter backed by httpx.

    One client is opened per request; nothing is pooled between calls.
    """

    def __init__(
        self,
        url: str = "",
        tls: TLSConfig | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.url = url
        self.tls = tls or TLSConfig()
        self.username = ""
        self.password = ""
        self._transport = transport

    def set_credentials(self, username: str, password: str) -> None:
        self.username = username
        self.password = password

    def _ssl_context(self) -> ssl.SSLContext:
        ctx = ssl.create_default_context(cafile=self.tls.ca_file or None)
        if self.tls.cert_file:
            ctx.load_cert_chain(self.tls.cert_file, self.tls.key_file or None)
        if self.tls.insecure:
            ctx.check_hostname = False
            ctx.verify_mode = ssl.CERT_NONE
        return ctx

    def _client(self) -> httpx.Client:
        kwargs: dict = {"follow_redirects": True, "headers": {"User-Agent": USER_AGENT}}
        if self._transport is not None:
            kwargs["transport"] = self._transport
        else:
            kwargs["verify"] = self._ssl_context()
        return httpx.Client(**kwargs)

    def get(self, url: str) -> bytes:
        auth = (self.username, self.password) if self.username else None
        try:
            with self._client() as client:
                resp = client.get(url, auth=auth)
                resp.raise_for_status()
                return resp.content
        except httpx.HTTPStatusError as e:
            raise TransportError(url, f"{e.response.status_code} {e.response.reason_phrase}") from e
        except httpx.HTTPError as e:
            raise TransportError(url, str(e) or type(e).__name__) from e
        except (OSError, ssl.SSLError) as e:
            # Bad TLS material on disk
            raise TransportError(url, f"TLS setup failed: {e}") from e


class Providers:
    """Registry of getter constructors by URL scheme."""

    def __init__(self, providers: dict[str, GetterConstructor] | None = None):
        self._providers: dict[str, GetterConstructor] = dict(providers or {})

    def register(self, schemes: Iterable[str], constructor: GetterConstructor) -> None:
        for scheme in schemes:
            self._providers[scheme.lower()] = constructor

    def schemes(self) -> list[str]:
        return sorted(self._providers)

    def new_getter(
        self,
        url: str,
        credentials: Credentials | None = None,
        tls: TLSConfig | None = None,
    ) -> Getter:
        """Build a getter for ``url`` with credentials bound at construction."""
        scheme = urlsplit(url).scheme.lower()
        constructor = self._providers.get(scheme)
        if constructor is None:
            raise UnsupportedScheme(scheme, url)
        getter = constructor(url, tls or TLSConfig())
        creds = credentials or Credentials()
        getter.set_credentials(creds.username, creds.password)
        logger.debug("Built %s getter for %s (user=%s)", scheme, url, creds.username or "-")
        return getter


def default_providers() -> Providers:
    return Providers({"http": HTTPGetter, "https": HTTPGetter})
