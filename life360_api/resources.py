"""Read access to circles, members and places."""
from __future__ import annotations

import logging
from typing import Any

from .const import Paths
from .exceptions import HttpStatusError
from .session import AuthenticatedSession
from .types import Circle, GetCirclesResponse, GetMembersResponse, GetPlacesResponse, Member, Place

log = logging.getLogger(__name__)


class ResourceClient:
    """Stateless GET operations for the v3 circle resources.

    Every call is a single request; a non-2xx response raises
    ``HttpStatusError`` naming the resource.
    """

    def __init__(self, session: AuthenticatedSession):
        if not isinstance(session, AuthenticatedSession):
            raise TypeError("ResourceClient requires an AuthenticatedSession; call Authenticator.authenticate() first")
        self.session = session

    async def _get_json(self, resource: str, path: str) -> Any:
        resp = await self.session.execute("GET", path)
        if not resp.ok:
            log.warning(f"Failed to fetch {resource}: {resp.status}")
            raise HttpStatusError(resource, resp.status)
        return resp.json()

    async def get_circles(self) -> GetCirclesResponse:
        """Fetch the circles the authenticated user belongs to."""
        return await self._get_json("circles", Paths.CIRCLES)

    async def get_circle(self, circle_id: str) -> Circle:
        """Fetch one circle, including its members and features."""
        return await self._get_json("circle", Paths.CIRCLE.format(circle_id=circle_id))

    async def get_places(self, circle_id: str) -> GetPlacesResponse:
        return await self._get_json("places", Paths.PLACES.format(circle_id=circle_id))

    async def get_place(self, circle_id: str, place_id: str) -> Place:
        return await self._get_json("place", Paths.PLACE.format(circle_id=circle_id, place_id=place_id))

    async def get_members(self, circle_id: str) -> GetMembersResponse:
        return await self._get_json("members", Paths.MEMBERS.format(circle_id=circle_id))

    async def get_member(self, circle_id: str, member_id: str) -> Member:
        """Fetch one member with features, issues, location and communications."""
        return await self._get_json("member", Paths.MEMBER.format(circle_id=circle_id, member_id=member_id))
