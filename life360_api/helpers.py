"""Helper functions for the life360_api package.

This module contains small utility functions used across the package:
token formatting and masking, form encoding and timestamps.
"""

from datetime import datetime, timezone
from typing import Mapping, Optional
from urllib.parse import urlencode


def format_bearer(access_token: str) -> str:
    """Build the Authorization value for an access token.

    Args:
        access_token: Raw access token from the token endpoint

    Returns:
        Authorization header value

    Example:
        >>> format_bearer("XYZ")
        'Bearer XYZ'
    """
    return f"Bearer {access_token}"


def mask_token(token: str, visible: int = 4) -> str:
    """Mask a token for log output, keeping the scheme and a short tail.

    Example:
        >>> mask_token("Bearer abcdefgh1234")
        'Bearer ***1234'
    """
    scheme, _, value = token.partition(" ")
    if not value:
        scheme, value = "", scheme
    tail = value[-visible:] if len(value) > visible * 2 else ""
    masked = f"***{tail}"
    return f"{scheme} {masked}" if scheme else masked


def encode_form(fields: Mapping[str, str]) -> str:
    """Encode fields as an application/x-www-form-urlencoded body.

    Example:
        >>> encode_form({"type": "location"})
        'type=location'
    """
    return urlencode(fields)


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """Return an ISO-8601 UTC timestamp with millisecond precision and a Z suffix.

    Example:
        >>> utc_timestamp(datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc))
        '2024-01-02T03:04:05.678Z'
    """
    if now is None:
        now = datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
