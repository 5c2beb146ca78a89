"""Turn the browser's geolocation result into a GeoPosition.

The page asks navigator.geolocation.getCurrentPosition for a fix and posts
either {"latitude", "longitude", "accuracy", "timestamp"} (timestamp in epoch
milliseconds) or {"error_code": <GeolocationPositionError.code>}.
"""
from __future__ import annotations

import math
from typing import Any, Mapping, Optional

from ..core.enums import GeolocationErrorCode
from ..core.exceptions import GeolocationError
from .model import GeoPosition

MESSAGES = {
    GeolocationErrorCode.UNSUPPORTED: "Geolocation is not supported by this browser.",
    GeolocationErrorCode.PERMISSION_DENIED: (
        "Location access was denied. Please allow location access in your browser settings and try again."
    ),
    GeolocationErrorCode.POSITION_UNAVAILABLE: (
        "Your location is currently unavailable. Please check that location services are turned on."
    ),
    GeolocationErrorCode.TIMEOUT: "Getting your location took too long. Please try again.",
}

STALE_FIX_MESSAGE = "Your location fix is out of date. Please try again."


def error_for(code: Any) -> GeolocationError:
    try:
        parsed = GeolocationErrorCode(int(code))
    except (TypeError, ValueError):
        parsed = GeolocationErrorCode.POSITION_UNAVAILABLE
    return GeolocationError(parsed, MESSAGES[parsed])


def _as_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def parse_fix(payload: Optional[Mapping[str, Any]], *, received_at: float, max_age_seconds: float) -> GeoPosition:
    """Validate a posted fix; raise GeolocationError for every unusable case.

    received_at is the server's epoch time in seconds.
    """
    if not payload:
        raise error_for(GeolocationErrorCode.UNSUPPORTED)

    if payload.get("error_code") is not None:
        raise error_for(payload.get("error_code"))

    lat = _as_float(payload.get("latitude"))
    lon = _as_float(payload.get("longitude"))
    if lat is None or lon is None or not (-90 <= lat <= 90) or not (-180 <= lon <= 180):
        raise error_for(GeolocationErrorCode.POSITION_UNAVAILABLE)

    ts_ms = _as_float(payload.get("timestamp"))
    if ts_ms is not None and received_at - ts_ms / 1000.0 > max_age_seconds:
        raise GeolocationError(GeolocationErrorCode.TIMEOUT, STALE_FIX_MESSAGE)

    accuracy = _as_float(payload.get("accuracy"))
    return GeoPosition(latitude=lat, longitude=lon, accuracy=accuracy)
