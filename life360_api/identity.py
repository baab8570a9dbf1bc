"""Network identities for talking to Life360.

Life360 fingerprints the TLS and HTTP/2 handshake and rejects clients that do
not look like its Android app. The session manager does not care how that
is achieved: it asks an ``IdentityProvider`` for a ``Transport`` presenting a
``ClientIdentity`` and sends every request through it.

Two providers ship with the package:
 - ``TlsClientIdentityProvider`` (default) drives the ``tls-client`` library,
   which reproduces the okhttp/Android handshake.
 - ``AiohttpIdentityProvider`` uses a plain aiohttp session. It does not alter
   the handshake and is meant for proxies that terminate TLS, and for tests.
"""
from __future__ import annotations

import asyncio
import json
import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Protocol

import aiohttp
from multidict import CIMultiDict

from . import const
from .exceptions import ParseError, TransportError
from .types import JSONType

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClientIdentity:
    """The client a transport must look like on the wire."""

    client_identifier: str = const.CLIENT_IDENTIFIER
    user_agent: str = const.USER_AGENT
    random_tls_extension_order: bool = True
    timeout: float = const.DEFAULT_TIMEOUT


@dataclass
class Response:
    """A fully read HTTP response, independent of the transport library.

    ``headers`` is case-insensitive and keeps repeated fields such as Set-Cookie.
    """

    status: int
    headers: Mapping[str, str] = field(default_factory=CIMultiDict)
    content: bytes = b""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    def json(self) -> JSONType:
        """Decode the body as JSON.

        Raises:
            ParseError: If the body is empty or not valid JSON
        """
        try:
            return json.loads(self.content)
        except ValueError as e:
            raise ParseError(f"Invalid JSON in response (status {self.status}): {e}") from e


class Transport(Protocol):
    async def request(self, method: str, url: str, *, headers: Dict[str, str],
                      data: Optional[str] = None) -> Response:
        ...

    async def close(self) -> None:
        ...


class IdentityProvider(Protocol):
    async def create_transport(self, identity: ClientIdentity) -> Transport:
        ...


def _expand_headers(headers) -> CIMultiDict:
    # tls-client reports a repeated header as a list of values
    expanded = CIMultiDict()
    for name, value in (headers or {}).items():
        for item in (value if isinstance(value, list) else [value]):
            expanded.add(name, item)
    return expanded


class TlsClientTransport:
    """Transport backed by a ``tls_client.Session``.

    tls-client is blocking, so each request runs in a worker thread.
    """

    def __init__(self, identity: ClientIdentity):
        # tls_client loads its native library at import time
        import tls_client
        from tls_client.exceptions import TLSClientExeption

        self._error_cls = TLSClientExeption
        self._timeout_seconds = max(1, math.ceil(identity.timeout))
        self._session = tls_client.Session(
            client_identifier=identity.client_identifier,
            random_tls_extension_order=identity.random_tls_extension_order,
        )
        self._session.headers.update({"User-Agent": identity.user_agent})

    async def request(self, method: str, url: str, *, headers: Dict[str, str],
                      data: Optional[str] = None) -> Response:
        try:
            resp = await asyncio.to_thread(
                self._session.execute_request,
                method=method,
                url=url,
                data=data,
                headers=headers,
                timeout_seconds=self._timeout_seconds,
            )
        except self._error_cls as e:
            log.error(f"{method} {url} failed: {e}")
            raise TransportError(f"{method} {url} failed: {e}") from e
        return Response(
            status=resp.status_code,
            headers=_expand_headers(resp.headers),
            content=resp.content or b"",
        )

    async def close(self) -> None:
        await asyncio.to_thread(self._session.close)


class TlsClientIdentityProvider:
    """Default provider: emulates the Android app's TLS fingerprint."""

    async def create_transport(self, identity: ClientIdentity) -> TlsClientTransport:
        log.debug(f"Creating tls-client transport as {identity.client_identifier}")
        return TlsClientTransport(identity)


class AiohttpTransport:
    """Transport backed by an ``aiohttp.ClientSession``."""

    def __init__(self, session: aiohttp.ClientSession):
        self._session = session

    async def request(self, method: str, url: str, *, headers: Dict[str, str],
                      data: Optional[str] = None) -> Response:
        try:
            async with self._session.request(method, url, headers=headers, data=data) as resp:
                body = await resp.read()
                log.debug(f"{method} {url} response - status: {resp.status}, content-length: {len(body)}")
                return Response(status=resp.status, headers=CIMultiDict(resp.headers), content=body)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            log.error(f"{method} {url} failed: {e!r}")
            raise TransportError(f"{method} {url} failed: {e!r}") from e

    async def close(self) -> None:
        if not self._session.closed:
            await self._session.close()


class AiohttpIdentityProvider:
    """Provider that hands out a plain aiohttp transport.

    Args:
        ssl: Passed to ``aiohttp.TCPConnector``; False disables verification
    """

    def __init__(self, ssl: bool = True):
        self.ssl = ssl

    async def create_transport(self, identity: ClientIdentity) -> AiohttpTransport:
        log.debug("Creating aiohttp transport (no TLS fingerprint emulation)")
        connector = aiohttp.TCPConnector(ssl=self.ssl)
        session = aiohttp.ClientSession(
            connector=connector,
            headers={"User-Agent": identity.user_agent},
            timeout=aiohttp.ClientTimeout(total=identity.timeout),
        )
        return AiohttpTransport(session)
