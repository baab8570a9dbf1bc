"""Session management for the Life360 API.

The ``SessionManager`` owns the single network transport of a client and the
current bearer token. Every outgoing request goes through ``execute`` and
carries the headers returned by ``headers()`` at the time of the call.

``AuthenticatedSession`` is the handle returned by
``Authenticator.authenticate()``. Resource and location clients only accept
this handle, so they cannot be built on a session that was never
authenticated.
"""
from __future__ import annotations

import asyncio
import logging
import threading
from typing import Dict, Mapping, Optional, Union

from .config import ClientConfig
from .exceptions import SessionNotInitializedError
from .helpers import encode_form, mask_token
from .identity import ClientIdentity, IdentityProvider, Response, TlsClientIdentityProvider, Transport

log = logging.getLogger(__name__)


class TokenCell:
    """Holds the bearer token: written by the authenticator, read by every call."""

    def __init__(self, value: Optional[str] = None):
        self._lock = threading.Lock()
        self._value = value

    def get(self) -> Optional[str]:
        with self._lock:
            return self._value

    def set(self, value: Optional[str]) -> None:
        with self._lock:
            self._value = value


class SessionManager:
    """Owns one transport and serves all outbound calls with consistent headers.

    Args:
        identity_provider: Produces the transport; defaults to tls-client emulation
        config: Endpoint and identity settings
        token: Pre-authenticated ``Authorization`` value, if the caller has one
    """

    def __init__(self, identity_provider: Optional[IdentityProvider] = None,
                 config: Optional[ClientConfig] = None, token: Optional[str] = None):
        self.config = config or ClientConfig()
        self.identity_provider = identity_provider or TlsClientIdentityProvider()
        self._token = TokenCell(token)
        self._transport: Optional[Transport] = None
        self._init_lock = asyncio.Lock()

    @property
    def identity(self) -> ClientIdentity:
        return ClientIdentity(
            client_identifier=self.config.client_identifier,
            user_agent=self.config.user_agent,
            random_tls_extension_order=self.config.random_tls_extension_order,
            timeout=self.config.timeout,
        )

    @property
    def initialized(self) -> bool:
        return self._transport is not None

    async def initialize(self) -> None:
        """Acquire the transport from the identity provider.

        Safe to call repeatedly or concurrently; the provider is asked once.
        """
        if self._transport is not None:
            return
        async with self._init_lock:
            if self._transport is None:
                log.info(f"Initializing transport as {self.config.client_identifier}")
                self._transport = await self.identity_provider.create_transport(self.identity)

    @property
    def token(self) -> Optional[str]:
        return self._token.get()

    def set_token(self, token: Optional[str]) -> None:
        self._token.set(token)
        if token:
            log.debug(f"Session token set to {mask_token(token)}")

    def headers(self) -> Dict[str, str]:
        """Return the header set sent with every request.

        The Authorization header is always present; before authentication it
        carries the placeholder token.
        """
        return {
            "User-Agent": self.config.user_agent,
            "Accept": "application/json",
            "Authorization": self._token.get() or self.config.initial_token,
        }

    async def execute(self, method: str, path: str,
                      body: Optional[Union[Mapping[str, str], str]] = None,
                      extra_headers: Optional[Mapping[str, str]] = None) -> Response:
        """Perform one HTTP call and return the raw response.

        Args:
            method: HTTP method
            path: Path relative to the configured endpoint
            body: Form fields (encoded as x-www-form-urlencoded) or a raw string
            extra_headers: Merged over ``headers()``; these win on conflict

        Raises:
            SessionNotInitializedError: If ``initialize()`` has not completed
            TransportError: If no HTTP response was received
        """
        if self._transport is None:
            raise SessionNotInitializedError(f"{method} {path} issued before the session was initialized")

        headers = self.headers()
        if extra_headers:
            headers.update(extra_headers)
        data = encode_form(body) if isinstance(body, Mapping) else body

        log.debug(f"{method} {path}")
        resp = await self._transport.request(method, self.config.endpoint + path, headers=headers, data=data)
        log.debug(f"{method} {path} -> {resp.status}")
        return resp

    async def close(self) -> None:
        if self._transport is not None:
            transport, self._transport = self._transport, None
            await transport.close()


class AuthenticatedSession:
    """Capability handle for a session whose token has been established.

    Instances are created by ``Authenticator.authenticate()``.
    """

    def __init__(self, manager: SessionManager):
        if not manager.initialized:
            raise SessionNotInitializedError("Cannot hand out a session that was never initialized")
        self._manager = manager

    @property
    def manager(self) -> SessionManager:
        return self._manager

    @property
    def token(self) -> Optional[str]:
        return self._manager.token

    def set_token(self, token: str) -> None:
        self._manager.set_token(token)

    def headers(self) -> Dict[str, str]:
        return self._manager.headers()

    async def execute(self, method: str, path: str,
                      body: Optional[Union[Mapping[str, str], str]] = None,
                      extra_headers: Optional[Mapping[str, str]] = None) -> Response:
        return await self._manager.execute(method, path, body=body, extra_headers=extra_headers)
