import itertools
from urllib.parse import parse_qs

import pytest

from life360_api import const
from life360_api.auth import Authenticator
from life360_api.config import Credentials
from life360_api.exceptions import HttpStatusError, TransportError
from life360_api.locations import LocationPoller, PollResult
from life360_api.session import SessionManager
from tests.utils.fakes import empty_response, json_response


async def _poller(provider):
    session = SessionManager(identity_provider=provider)
    handle = await Authenticator(session, Credentials("u", "p", token="Bearer tok")).authenticate()
    return LocationPoller(handle)


@pytest.mark.asyncio
async def test_poll_not_modified_is_unchanged(provider, transport):
    poller = await _poller(provider)
    transport.queue(empty_response(304))

    result = await poller.poll("circle-1")

    assert result == PollResult.unchanged()
    assert result.changed is False
    assert result.payload is None


@pytest.mark.asyncio
async def test_poll_ok_returns_payload(provider, transport):
    poller = await _poller(provider)
    payload = {"data": {"items": [{"id": "dev1", "latitude": 1.5, "longitude": 2.5}]}}
    transport.queue(json_response(payload))

    result = await poller.poll("circle-1")

    assert result.changed is True
    assert result.payload == payload


@pytest.mark.asyncio
async def test_poll_error_status_raises(provider, transport):
    poller = await _poller(provider)
    transport.queue(empty_response(500))

    with pytest.raises(HttpStatusError) as exc_info:
        await poller.poll("circle-1")
    assert exc_info.value.status == 500


@pytest.mark.asyncio
async def test_poll_sends_event_envelope(provider, transport):
    poller = await _poller(provider)
    transport.queue(empty_response(304))

    await poller.poll("circle-1")

    call = transport.calls[0]
    assert call["method"] == "GET"
    assert call["url"] == const.ENDPOINT + "/v5/circles/devices/locations"
    headers = call["headers"]
    assert headers["circleid"] == "circle-1"
    assert headers["ce-id"] == const.CE_ID
    assert headers["ce-type"] == "com.life360.cloud.platform.devices.locations.v1"
    assert headers["ce-source"] == const.CE_SOURCE
    assert headers["ce-specversion"] == "1.0"
    assert headers["ce-time"].endswith("Z")
    assert headers["Authorization"] == "Bearer tok"
    assert headers["User-Agent"] == const.USER_AGENT


@pytest.mark.asyncio
async def test_poll_timestamp_regenerated_per_call(provider, transport, monkeypatch):
    counter = itertools.count()
    monkeypatch.setattr(
        "life360_api.locations.utc_timestamp",
        lambda: f"2024-01-01T00:00:0{next(counter)}.000Z",
    )
    poller = await _poller(provider)
    transport.queue(empty_response(304), empty_response(304))

    await poller.poll("circle-1")
    await poller.poll("circle-1")

    times = [c["headers"]["ce-time"] for c in transport.calls]
    assert times == ["2024-01-01T00:00:00.000Z", "2024-01-01T00:00:01.000Z"]


@pytest.mark.asyncio
async def test_request_location_update_success(provider, transport):
    poller = await _poller(provider)
    transport.queue(json_response({"requestId": "r1", "isPollable": "1"}))

    assert await poller.request_location_update("c1", "m1") is True

    call = transport.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == const.ENDPOINT + "/v3/circles/c1/members/m1/request"
    assert parse_qs(call["data"]) == {"type": ["location"]}
    assert call["headers"]["Content-Type"] == "application/x-www-form-urlencoded"


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [400, 403, 404, 500, 503])
async def test_request_location_update_failure_returns_false(provider, transport, status):
    poller = await _poller(provider)
    transport.queue(empty_response(status))

    assert await poller.request_location_update("c1", "m1") is False


@pytest.mark.asyncio
async def test_request_location_update_transport_error_propagates(provider, transport):
    poller = await _poller(provider)
    transport.queue(TransportError("connection reset"))

    with pytest.raises(TransportError):
        await poller.request_location_update("c1", "m1")


def test_poll_result_cannot_be_unchanged_with_payload():
    with pytest.raises(ValueError):
        PollResult(changed=False, payload={"data": 1})


def test_poller_requires_authenticated_session(provider):
    with pytest.raises(TypeError):
        LocationPoller(SessionManager(identity_provider=provider))
