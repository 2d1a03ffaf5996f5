"""Great-circle distance helpers."""

import math

# Mean Earth radius in kilometers
EARTH_RADIUS_KM = 6371


def distance_km(a, b) -> float:
    """Haversine distance in kilometers between two points.

    Points may be anything with ``lat`` and ``lng`` attributes or plain
    ``(lat, lng)`` pairs.
    """
    lat1, lng1 = _as_pair(a)
    lat2, lng2 = _as_pair(b)

    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    h = math.sin(d_lat / 2) ** 2 + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    # Rounding can push antipodal points fractionally past 1
    h = min(h, 1.0)
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_KM * c


def _as_pair(point) -> tuple[float, float]:
    if isinstance(point, (tuple, list)):
        return float(point[0]), float(point[1])
    return float(point.lat), float(point.lng)
