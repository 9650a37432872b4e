"""
Reverse geocoding against the static city table.
"""
import math
from typing import Iterable, Optional

from constants import CITY_COORDINATES, UNKNOWN_LOCATION, CityCoordinates


EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points, in kilometres."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)
    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def reverse_geocode(
    latitude: float,
    longitude: float,
    cities: Iterable[CityCoordinates] = CITY_COORDINATES,
    max_distance_km: Optional[float] = None,
) -> str:
    """
    Canonical name of the nearest known city.

    Returns the "Unknown" sentinel when the table is empty or the nearest city
    is farther than ``max_distance_km``.
    """
    nearest = min(
        cities,
        key=lambda c: haversine_km(latitude, longitude, c.latitude, c.longitude),
        default=None,
    )
    if nearest is None:
        return UNKNOWN_LOCATION
    if max_distance_km is not None:
        if haversine_km(latitude, longitude, nearest.latitude, nearest.longitude) > max_distance_km:
            return UNKNOWN_LOCATION
    return nearest.city
