"""Geo engine core package."""

from geo_engine.distance import EARTH_RADIUS_KM, haversine_distance_km, haversine_distance_meters
from geo_engine.models import Facility, GeoPoint, NearestMatch
from geo_engine.nearest import find_nearest

__all__ = [
    "EARTH_RADIUS_KM",
    "Facility",
    "GeoPoint",
    "NearestMatch",
    "find_nearest",
    "haversine_distance_km",
    "haversine_distance_meters",
]
