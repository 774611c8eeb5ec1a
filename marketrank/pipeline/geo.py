"""
Great-circle distance helpers.
"""
import math
from typing import Sequence

import numpy as np

from ..models.listing import GeoPoint


EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """
    Distance in kilometers between two lat/lng pairs (haversine formula).
    Coordinates are not validated.
    """
    d_lat = (lat2 - lat1) * math.pi / 180
    d_lng = (lng2 - lng1) * math.pi / 180

    a = (
        math.sin(d_lat / 2) * math.sin(d_lat / 2)
        + math.cos(lat1 * math.pi / 180) * math.cos(lat2 * math.pi / 180)
        * math.sin(d_lng / 2) * math.sin(d_lng / 2)
    )
    # Rounding can push a just outside [0, 1] for antipodal points
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_km(a: GeoPoint, b: GeoPoint) -> float:
    """Distance in kilometers between two points."""
    return haversine_km(a.lat, a.lng, b.lat, b.lng)


def distances_km(origin: GeoPoint, points: Sequence[GeoPoint]) -> np.ndarray:
    """
    Vectorised haversine from one origin to many points.
    Used for bulk radius filtering, not for scoring.
    """
    if not points:
        return np.zeros(0)

    lats = np.radians(np.array([p.lat for p in points], dtype=float))
    lngs = np.radians(np.array([p.lng for p in points], dtype=float))
    lat0 = math.radians(origin.lat)
    lng0 = math.radians(origin.lng)

    d_lat = lats - lat0
    d_lng = lngs - lng0
    a = np.sin(d_lat / 2) ** 2 + math.cos(lat0) * np.cos(lats) * np.sin(d_lng / 2) ** 2
    # Guard against tiny negative values from rounding before sqrt(1 - a)
    a = np.clip(a, 0.0, 1.0)
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return EARTH_RADIUS_KM * c
