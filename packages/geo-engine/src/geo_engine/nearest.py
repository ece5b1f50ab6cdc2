from collections.abc import Sequence

from geo_engine.distance import haversine_distance_km
from geo_engine.models import Facility, GeoPoint, NearestMatch


def find_nearest(query: GeoPoint, registry: Sequence[Facility]) -> NearestMatch:
    """Return the registry entry closest to ``query``.

    The scan keeps the first facility seen on equal distances, so the result
    only depends on registry order when two branches are equidistant.
    Distances are returned at full precision; rounding is left to callers.
    """
    if not registry:
        raise ValueError("facility registry must not be empty")

    best: NearestMatch | None = None
    for facility in registry:
        distance = haversine_distance_km(query, facility.location)
        if best is None or distance < best.distance_km:
            best = NearestMatch(facility=facility, distance_km=distance)
    return best
