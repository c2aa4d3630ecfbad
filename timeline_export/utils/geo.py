"""Geospatial helpers."""

from __future__ import annotations

from math import atan2, cos, radians, sin, sqrt


EARTH_RADIUS_METERS = 6_371_000
E7_SCALE = 10_000_000


def decode_e7(value: int) -> float:
    """Convert a fixed-point coordinate (degrees * 1e7) to decimal degrees."""

    return value / E7_SCALE


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Return the distance between two coordinates in meters."""

    phi1 = radians(lat1)
    phi2 = radians(lat2)
    delta_phi = radians(lat2 - lat1)
    delta_lambda = radians(lon2 - lon1)

    a = sin(delta_phi / 2) ** 2 + cos(phi1) * cos(phi2) * sin(delta_lambda / 2) ** 2
    c = 2 * atan2(sqrt(a), sqrt(1 - a))

    return EARTH_RADIUS_METERS * c
