"""Life360Client: one object for authentication, resources and location updates.

This module wires together:
 - SessionManager (transport + bearer token)
 - Authenticator (credential exchange or pre-supplied token)
 - ResourceClient (circles, members, places)
 - LocationPoller (device-locations poll, member refresh trigger)
"""
from __future__ import annotations

import logging
from typing import Optional

from .auth import Authenticator, AuthState
from .config import ClientConfig, Credentials
from .exceptions import SessionNotInitializedError
from .identity import IdentityProvider
from .locations import LocationPoller, PollResult
from .resources import ResourceClient
from .session import AuthenticatedSession, SessionManager
from .types import Circle, GetCirclesResponse, GetMembersResponse, GetPlacesResponse, Member, Place

log = logging.getLogger(__name__)


class Life360Client:
    """Client for the Life360 API.

    Example:
        async with await Life360Client.create("me@example.com", "secret") as client:
            circles = await client.get_circles()
            circle_id = circles["circles"][0]["id"]
            result = await client.poll_locations(circle_id)
    """

    def __init__(self, username: str = "", password: str = "", token: Optional[str] = None, *,
                 config: Optional[ClientConfig] = None,
                 identity_provider: Optional[IdentityProvider] = None):
        self.credentials = Credentials(username=username, password=password, token=token)
        self.session = SessionManager(identity_provider=identity_provider, config=config)
        self.authenticator = Authenticator(self.session, self.credentials)
        self._resources: Optional[ResourceClient] = None
        self._locations: Optional[LocationPoller] = None

    @classmethod
    async def create(cls, username: str = "", password: str = "", token: Optional[str] = None, *,
                     config: Optional[ClientConfig] = None,
                     identity_provider: Optional[IdentityProvider] = None) -> "Life360Client":
        """Create and authenticate a client.

        The transport is closed again if authentication fails.

        Raises:
            TransportError, HttpStatusError, ParseError: From authentication
        """
        inst = cls(username, password, token, config=config, identity_provider=identity_provider)
        try:
            await inst.authenticate()
        except BaseException:
            await inst.close()
            raise
        return inst

    @classmethod
    async def from_credentials(cls, credentials: Credentials, **kwargs) -> "Life360Client":
        return await cls.create(credentials.username, credentials.password, credentials.token, **kwargs)

    async def authenticate(self) -> str:
        """Authenticate (once) and return the Authorization value in use."""
        handle = await self.authenticator.authenticate()
        self._resources = ResourceClient(handle)
        self._locations = LocationPoller(handle)
        return handle.token

    @property
    def authenticated(self) -> bool:
        return self.authenticator.state is AuthState.AUTHENTICATED

    @property
    def token(self) -> Optional[str]:
        return self.session.token

    def set_token(self, token: str) -> None:
        """Replace the token used by subsequent calls."""
        self.session.set_token(token)

    async def close(self) -> None:
        await self.session.close()

    async def __aenter__(self) -> "Life360Client":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _require(self, component):
        if component is None:
            raise SessionNotInitializedError("Client is not authenticated; call authenticate() or use create()")
        return component

    @property
    def resources(self) -> ResourceClient:
        return self._require(self._resources)

    @property
    def locations(self) -> LocationPoller:
        return self._require(self._locations)

    @property
    def authenticated_session(self) -> AuthenticatedSession:
        return self.resources.session

    # -------------------------
    # Resources
    # -------------------------
    async def get_circles(self) -> GetCirclesResponse:
        return await self.resources.get_circles()

    async def get_circle(self, circle_id: str) -> Circle:
        return await self.resources.get_circle(circle_id)

    async def get_places(self, circle_id: str) -> GetPlacesResponse:
        return await self.resources.get_places(circle_id)

    async def get_place(self, circle_id: str, place_id: str) -> Place:
        return await self.resources.get_place(circle_id, place_id)

    async def get_members(self, circle_id: str) -> GetMembersResponse:
        return await self.resources.get_members(circle_id)

    async def get_member(self, circle_id: str, member_id: str) -> Member:
        return await self.resources.get_member(circle_id, member_id)

    # -------------------------
    # Location updates
    # -------------------------
    async def poll_locations(self, circle_id: str) -> PollResult:
        return await self.locations.poll(circle_id)

    async def request_location_update(self, circle_id: str, member_id: str) -> bool:
        return await self.locations.request_location_update(circle_id, member_id)
