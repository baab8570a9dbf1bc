"""Credential exchange for the Life360 API."""
from __future__ import annotations

import asyncio
import enum
import logging
from typing import Optional

from .config import Credentials
from .const import FORM_CONTENT_TYPE, Paths
from .exceptions import HttpStatusError, ParseError
from .helpers import format_bearer, mask_token
from .session import AuthenticatedSession, SessionManager

log = logging.getLogger(__name__)


class AuthState(enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"


class Authenticator:
    """Exchanges username/password for a bearer token and installs it.

    A token present in ``credentials`` is trusted as-is: no request is made
    and no freshness check is performed. Tokens are never refreshed; on a
    401 from a later call, build a new client and authenticate again.
    """

    def __init__(self, session: SessionManager, credentials: Credentials):
        self.session = session
        self.credentials = credentials
        self.state = AuthState.UNAUTHENTICATED
        self._handle: Optional[AuthenticatedSession] = None
        self._lock = asyncio.Lock()

    async def authenticate(self) -> AuthenticatedSession:
        """Establish the session token.

        Returns:
            Handle required by ResourceClient and LocationPoller

        Raises:
            TransportError: If the token request did not get a response
            HttpStatusError: If the token endpoint answered with a non-2xx status
            ParseError: If the response carried no ``access_token``
        """
        async with self._lock:
            if self._handle is not None:
                # The session may have been closed since; reopen its transport
                await self.session.initialize()
                return self._handle

            self.state = AuthState.AUTHENTICATING
            try:
                await self.session.initialize()
                if self.credentials.token:
                    log.info("Using pre-supplied token, skipping credential exchange")
                    token = self.credentials.token
                else:
                    token = await self._request_token()
                    self.credentials.token = token
            except BaseException:
                self.state = AuthState.UNAUTHENTICATED
                raise

            self.session.set_token(token)
            self._handle = AuthenticatedSession(self.session)
            self.state = AuthState.AUTHENTICATED
            log.info(f"Authenticated with token {mask_token(token)}")
            return self._handle

    async def _request_token(self) -> str:
        log.info("Requesting access token...")
        resp = await self.session.execute(
            "POST",
            Paths.TOKEN,
            body={
                "username": self.credentials.username,
                "password": self.credentials.password,
                "grant_type": "password",
            },
            extra_headers={"Content-Type": FORM_CONTENT_TYPE},
        )
        if not resp.ok:
            log.error(f"Token request rejected with status {resp.status}")
            raise HttpStatusError("token", resp.status)

        body = resp.json()
        access_token = body.get("access_token") if isinstance(body, dict) else None
        if not access_token or not isinstance(access_token, str):
            raise ParseError("Token response did not contain an access_token")
        return format_bearer(access_token)
