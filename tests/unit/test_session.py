import asyncio

import pytest

from life360_api import const
from life360_api.config import ClientConfig
from life360_api.exceptions import SessionNotInitializedError, TransportError
from life360_api.session import AuthenticatedSession, SessionManager, TokenCell
from tests.utils.fakes import empty_response, json_response


def test_headers_use_placeholder_before_authentication(provider):
    session = SessionManager(identity_provider=provider)
    headers = session.headers()
    assert headers == {
        "User-Agent": const.USER_AGENT,
        "Accept": "application/json",
        "Authorization": const.INITIAL_TOKEN,
    }


def test_headers_read_current_token(provider):
    session = SessionManager(identity_provider=provider, token="Bearer first")
    assert session.headers()["Authorization"] == "Bearer first"
    session.set_token("Bearer second")
    assert session.headers()["Authorization"] == "Bearer second"


@pytest.mark.asyncio
async def test_execute_before_initialize_raises(provider, transport):
    session = SessionManager(identity_provider=provider)
    with pytest.raises(SessionNotInitializedError):
        await session.execute("GET", "/v3/circles")
    assert transport.calls == []


@pytest.mark.asyncio
async def test_initialize_is_idempotent(provider):
    session = SessionManager(identity_provider=provider)
    await session.initialize()
    await session.initialize()
    assert provider.created == 1
    assert session.initialized


@pytest.mark.asyncio
async def test_concurrent_initialize_creates_one_transport(provider):
    session = SessionManager(identity_provider=provider)
    await asyncio.gather(*(session.initialize() for _ in range(5)))
    assert provider.created == 1


@pytest.mark.asyncio
async def test_initialize_passes_client_identity(provider):
    config = ClientConfig(timeout=10.0)
    session = SessionManager(identity_provider=provider, config=config)
    await session.initialize()
    identity = provider.identities[0]
    assert identity.client_identifier == "okhttp4_android_13"
    assert identity.user_agent == const.USER_AGENT
    assert identity.random_tls_extension_order is True
    assert identity.timeout == 10.0


@pytest.mark.asyncio
async def test_execute_merges_extra_headers_and_encodes_form(provider, transport):
    session = SessionManager(identity_provider=provider, token="Bearer abc")
    await session.initialize()
    transport.queue(json_response({"ok": True}))

    resp = await session.execute(
        "POST",
        "/v3/things",
        body={"type": "location", "note": "a b"},
        extra_headers={"Accept": "text/plain", "X-Extra": "1"},
    )

    assert resp.status == 200
    call = transport.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == const.ENDPOINT + "/v3/things"
    assert call["data"] == "type=location&note=a+b"
    assert call["headers"]["Accept"] == "text/plain"
    assert call["headers"]["X-Extra"] == "1"
    assert call["headers"]["Authorization"] == "Bearer abc"


@pytest.mark.asyncio
async def test_execute_returns_error_responses_unchanged(provider, transport):
    session = SessionManager(identity_provider=provider)
    await session.initialize()
    transport.queue(empty_response(503))
    resp = await session.execute("GET", "/v3/circles")
    assert resp.status == 503
    assert not resp.ok


@pytest.mark.asyncio
async def test_execute_does_not_retry_transport_errors(provider, transport):
    session = SessionManager(identity_provider=provider)
    await session.initialize()
    transport.queue(TransportError("connection refused"), json_response({}))
    with pytest.raises(TransportError):
        await session.execute("GET", "/v3/circles")
    assert len(transport.calls) == 1


@pytest.mark.asyncio
async def test_close_releases_transport(provider, transport):
    session = SessionManager(identity_provider=provider)
    await session.initialize()
    await session.close()
    assert transport.closed
    assert not session.initialized
    # Closing twice is harmless
    await session.close()


def test_authenticated_session_requires_initialized_manager(provider):
    session = SessionManager(identity_provider=provider)
    with pytest.raises(SessionNotInitializedError):
        AuthenticatedSession(session)


def test_token_cell():
    cell = TokenCell()
    assert cell.get() is None
    cell.set("Bearer x")
    assert cell.get() == "Bearer x"
