"""Location updates: the device-locations poll and the member refresh trigger.

Typical flow::

    ok = await poller.request_location_update(circle_id, member_id)
    await asyncio.sleep(5)
    result = await poller.poll(circle_id)
    if result.changed:
        handle(result.payload)

A 304 from the poll endpoint means nothing changed since the last poll. It is
returned as ``PollResult.unchanged()``, not raised.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from . import const
from .const import FORM_CONTENT_TYPE, Paths
from .exceptions import HttpStatusError
from .helpers import utc_timestamp
from .session import AuthenticatedSession
from .types import DeviceLocationResponse

log = logging.getLogger(__name__)

HTTP_NOT_MODIFIED = 304


@dataclass(frozen=True)
class PollResult:
    """Outcome of a poll: either unchanged (no payload) or updated with a payload."""

    changed: bool
    payload: Optional[DeviceLocationResponse] = None

    def __post_init__(self):
        if not self.changed and self.payload is not None:
            raise ValueError("An unchanged PollResult cannot carry a payload")

    @classmethod
    def unchanged(cls) -> "PollResult":
        return cls(changed=False)

    @classmethod
    def updated(cls, payload: DeviceLocationResponse) -> "PollResult":
        return cls(changed=True, payload=payload)


def event_headers(circle_id: str) -> Dict[str, str]:
    """Headers for the device-locations request, with ``ce-time`` set to now."""
    return {
        "circleid": circle_id,
        "ce-id": const.CE_ID,
        "ce-type": const.CE_TYPE,
        "ce-source": const.CE_SOURCE,
        "ce-specversion": const.CE_SPECVERSION,
        "ce-time": utc_timestamp(),
    }


class LocationPoller:
    """Polls device locations for a circle and nudges members to report."""

    def __init__(self, session: AuthenticatedSession):
        if not isinstance(session, AuthenticatedSession):
            raise TypeError("LocationPoller requires an AuthenticatedSession; call Authenticator.authenticate() first")
        self.session = session

    async def poll(self, circle_id: str) -> PollResult:
        """Fetch the latest device locations of a circle.

        Returns:
            ``PollResult.unchanged()`` on 304, otherwise ``PollResult.updated(payload)``

        Raises:
            HttpStatusError: For any other non-2xx status
        """
        resp = await self.session.execute("GET", Paths.DEVICE_LOCATIONS, extra_headers=event_headers(circle_id))
        if resp.status == HTTP_NOT_MODIFIED:
            log.debug(f"No location change for circle {circle_id}")
            return PollResult.unchanged()
        if not resp.ok:
            log.warning(f"Failed to fetch location update: {resp.status}")
            raise HttpStatusError("location update", resp.status)
        return PollResult.updated(resp.json())

    async def request_location_update(self, circle_id: str, member_id: str) -> bool:
        """Ask a member's device to report a fresh location.

        This does not return location data; poll afterwards to pick it up.

        Returns:
            True if the server accepted the request (2xx), False otherwise
        """
        resp = await self.session.execute(
            "POST",
            Paths.MEMBER_REQUEST.format(circle_id=circle_id, member_id=member_id),
            body={"type": "location"},
            extra_headers={"Content-Type": FORM_CONTENT_TYPE},
        )
        if resp.ok:
            log.info(f"Location update requested for member {member_id}")
        else:
            log.warning(f"Location update request for member {member_id} returned {resp.status}")
        return resp.ok
