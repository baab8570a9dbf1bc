"""Constants for the Life360 API."""

ENDPOINT = "https://api-cloudfront.life360.com"

USER_AGENT = "com.life360.android.safetymapd/KOKO/24.50.0 android/13"

# Sent as the Authorization header until a bearer token is installed
INITIAL_TOKEN = (
    "Basic Y2F0aGFwYWNyQVBoZUtVc3RlOGV2ZXZldnVjSGFmZVRydVl1ZnJhYzpkOEM5ZVlVdkE2dUZ1YnJ1SmVnZXRyZVZ1dFJlQ1JVWQ=="
)

CLIENT_IDENTIFIER = "okhttp4_android_13"
DEFAULT_TIMEOUT = 3.0  # seconds

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class Paths:
    """Path templates relative to ENDPOINT."""

    TOKEN = "/v3/oauth2/token"
    CIRCLES = "/v3/circles"
    CIRCLE = "/v3/circles/{circle_id}"
    PLACES = "/v3/circles/{circle_id}/places"
    PLACE = "/v3/circles/{circle_id}/places/{place_id}"
    MEMBERS = "/v3/circles/{circle_id}/members"
    MEMBER = "/v3/circles/{circle_id}/members/{member_id}"
    MEMBER_REQUEST = "/v3/circles/{circle_id}/members/{member_id}/request"
    DEVICE_LOCATIONS = "/v5/circles/devices/locations"


# CloudEvents envelope expected by the device-locations endpoint
CE_ID = "054443b3-0cc7-4c3e-9201-76ba4f0cb1d7"
CE_TYPE = "com.life360.cloud.platform.devices.locations.v1"
CE_SOURCE = "/ANDROID/13/Google-Pixel-5/androidGraph-4e"
CE_SPECVERSION = "1.0"
