"""Great-circle distance and compass bearing between coordinates."""

from __future__ import annotations

import math
from typing import Protocol

from .models import Bearing

EARTH_RADIUS_KM = 6371.0

_COMPASS = (
    Bearing.N,
    Bearing.NE,
    Bearing.E,
    Bearing.SE,
    Bearing.S,
    Bearing.SW,
    Bearing.W,
    Bearing.NW,
)

ARROWS: dict[Bearing, str] = {
    Bearing.N: "↑",
    Bearing.NE: "↗",
    Bearing.E: "→",
    Bearing.SE: "↘",
    Bearing.S: "↓",
    Bearing.SW: "↙",
    Bearing.W: "←",
    Bearing.NW: "↖",
    Bearing.TARGET: "🎯",
}


class Coordinate(Protocol):
    lat: float
    lng: float


def distance(a: Coordinate, b: Coordinate) -> float:
    """Haversine distance in kilometres."""
    if a.lat == b.lat and a.lng == b.lng:
        return 0.0

    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    d_lat = lat2 - lat1
    d_lng = math.radians(b.lng - a.lng)
    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lng / 2) ** 2
    # min() keeps rounding noise from pushing asin out of its domain for antipodes
    return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(h)))


def initial_bearing(origin: Coordinate, target: Coordinate) -> float:
    """Initial great-circle bearing in degrees, normalised to [0, 360)."""
    lat1 = math.radians(origin.lat)
    lat2 = math.radians(target.lat)
    d_lng = math.radians(target.lng - origin.lng)
    y = math.sin(d_lng) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(d_lng)
    return math.degrees(math.atan2(y, x)) % 360.0


def compass_sector(degrees: float) -> Bearing:
    """Bucket a bearing into 45-degree sectors centred on each compass point.

    Sectors are half-open ``[low, high)`` so a bearing on a boundary belongs to the
    clockwise-next sector (22.5 is NE, 337.5 is N).
    """
    return _COMPASS[int(((degrees % 360.0) + 22.5) // 45) % 8]


def bearing(origin: Coordinate, target: Coordinate) -> Bearing:
    return compass_sector(initial_bearing(origin, target))


def arrow(value: Bearing) -> str:
    return ARROWS[value]
