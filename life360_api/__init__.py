"""Life360 API Client Package.

This package provides an asyncio client for the Life360 location-sharing
service. Life360 fingerprints TLS handshakes, so requests go through a
transport that presents the Android app's identity (by default via
``tls-client``).

Example Usage:
    from life360_api import Life360Client

    client = await Life360Client.create("me@example.com", "secret")
    try:
        circles = await client.get_circles()
        circle_id = circles["circles"][0]["id"]

        members = await client.get_members(circle_id)
        for member in members["members"]:
            await client.request_location_update(circle_id, member["id"])

        result = await client.poll_locations(circle_id)
        if result.changed:
            print(result.payload)
    finally:
        await client.close()

    # Lower-level pieces, for a custom transport:
    from life360_api import SessionManager, Authenticator, ResourceClient, Credentials

    session = SessionManager(identity_provider=my_provider)
    handle = await Authenticator(session, Credentials("u", "p")).authenticate()
    circles = await ResourceClient(handle).get_circles()
"""

from ._version import __version__, __version_info__
from .exceptions import (
    Life360ApiException,
    TransportError,
    HttpStatusError,
    ParseError,
    SessionNotInitializedError,
)
from .config import ClientConfig, Credentials, load_credentials
from .identity import (
    ClientIdentity,
    Response,
    Transport,
    IdentityProvider,
    TlsClientIdentityProvider,
    AiohttpIdentityProvider,
)
from .session import SessionManager, AuthenticatedSession, TokenCell
from .auth import Authenticator, AuthState
from .resources import ResourceClient
from .locations import LocationPoller, PollResult
from .client import Life360Client

__all__ = [
    # Version
    '__version__',
    '__version_info__',

    # Main classes
    'Life360Client',
    'SessionManager',
    'AuthenticatedSession',
    'Authenticator',
    'ResourceClient',
    'LocationPoller',

    # Identity
    'ClientIdentity',
    'Response',
    'Transport',
    'IdentityProvider',
    'TlsClientIdentityProvider',
    'AiohttpIdentityProvider',

    # Config
    'ClientConfig',
    'Credentials',
    'load_credentials',

    # Exceptions
    'Life360ApiException',
    'TransportError',
    'HttpStatusError',
    'ParseError',
    'SessionNotInitializedError',

    # Types
    'PollResult',
    'AuthState',
    'TokenCell',
]
