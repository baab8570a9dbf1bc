"""Shared typing helpers used across the life360_api package.

This module centralizes JSON-like typings and the typed dictionaries that
describe Life360 response documents, so other modules can import concrete
types rather than using unstructured Any in many places.

The server sends most scalar fields as strings (for example "1" / "0" for
booleans and coordinates as decimal strings); the annotations follow what the
server actually returns.
"""
from __future__ import annotations

from typing import Dict, List, Union, TypedDict, Optional


# Recursive JSON-ish type used for payloads / returned JSON values
JSONType = Union[Dict[str, "JSONType"], List["JSONType"], str, int, float, bool, None]


class AuthenticationResponse(TypedDict, total=False):
    access_token: str
    token_type: str


class CircleSummary(TypedDict):
    id: str
    name: str
    createdAt: str


class GetCirclesResponse(TypedDict):
    circles: List[CircleSummary]


class MemberFeatures(TypedDict, total=False):
    device: str
    smartphone: str
    nonSmartphoneLocating: str
    geofencing: str
    shareLocation: str
    shareOffTimestamp: Optional[str]
    disconnected: str
    pendingInvite: str
    mapDisplay: str


class MemberIssues(TypedDict, total=False):
    disconnected: str
    type: Optional[str]
    status: Optional[str]
    title: Optional[str]
    dialog: Optional[str]
    action: Optional[str]
    troubleshooting: str


class MemberLocation(TypedDict, total=False):
    latitude: str
    longitude: str
    accuracy: str
    startTimestamp: int
    endTimestamp: str
    since: int
    timestamp: str
    name: Optional[str]
    placeType: Optional[str]
    source: Optional[str]
    sourceId: Optional[str]
    address1: str
    address2: str
    shortAddress: str
    inTransit: str
    tripId: Optional[str]
    driveSDKStatus: Optional[str]
    battery: str
    charge: str
    wifiState: str
    speed: float
    isDriving: str
    userActivity: Optional[str]
    algorithm: Optional[str]


class CommunicationChannel(TypedDict, total=False):
    channel: str
    value: str
    type: Optional[str]


class Member(TypedDict, total=False):
    features: MemberFeatures
    issues: MemberIssues
    location: Optional[MemberLocation]
    communications: List[CommunicationChannel]
    medical: Optional[str]
    relation: Optional[str]
    createdAt: str
    activity: Optional[str]
    id: str
    firstName: str
    lastName: str
    isAdmin: str
    avatar: Optional[str]
    pinNumber: Optional[str]
    loginEmail: str
    loginPhone: str


class GetMembersResponse(TypedDict):
    members: List[Member]


class CircleFeatures(TypedDict, total=False):
    ownerId: Optional[str]
    premium: str
    locationUpdatesLeft: int
    priceMonth: str
    priceYear: str
    skuId: Optional[str]
    skuTier: Optional[str]


class Circle(TypedDict, total=False):
    id: str
    name: str
    color: str
    type: str
    createdAt: str
    memberCount: str
    unreadMessages: str
    unreadNotifications: str
    features: CircleFeatures
    members: List[Member]


class Place(TypedDict, total=False):
    id: str
    ownerId: str
    circleId: str
    name: str
    latitude: str
    longitude: str
    radius: str
    type: Optional[str]
    typeLabel: Optional[str]


class GetPlacesResponse(TypedDict):
    places: List[Place]


class PollableRequest(TypedDict, total=False):
    requestId: str
    isPollable: str


# The device-locations payload is versioned server-side and not pinned here
DeviceLocationResponse = Dict[str, JSONType]
