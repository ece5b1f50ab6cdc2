import math

from geo_engine.models import GeoPoint

EARTH_RADIUS_KM = 6371.0


def haversine_distance_km(start: GeoPoint, end: GeoPoint) -> float:
    start_lat = math.radians(start.lat)
    end_lat = math.radians(end.lat)
    delta_lat = math.radians(end.lat - start.lat)
    delta_lon = math.radians(end.lon - start.lon)

    h = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(start_lat) * math.cos(end_lat) * math.sin(delta_lon / 2) ** 2
    )
    # rounding can push h just past 1 for antipodal points
    h = min(max(h, 0.0), 1.0)
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(h))


def haversine_distance_meters(start: GeoPoint, end: GeoPoint) -> float:
    return haversine_distance_km(start, end) * 1000.0
