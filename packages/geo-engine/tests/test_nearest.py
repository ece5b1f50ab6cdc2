import pytest

from geo_engine.models import Facility, GeoPoint
from geo_engine.nearest import find_nearest

LAGOS_BRANCHES = (
    Facility(id=1, name="Ikeja Pharmacy", lat=6.6020, lon=3.3515),
    Facility(id=2, name="Victoria Island Pharmacy", lat=6.4281, lon=3.4216),
    Facility(id=3, name="Lekki Pharmacy", lat=6.4654, lon=3.4765),
    Facility(id=4, name="Surulere Pharmacy", lat=6.5097, lon=3.3619),
)


def test_find_nearest_picks_closest_branch() -> None:
    match = find_nearest(GeoPoint(lat=6.60, lon=3.35), LAGOS_BRANCHES)

    assert match.facility.id == 1
    assert 0.0 <= match.distance_km <= 0.5


def test_find_nearest_returns_registry_member() -> None:
    queries = [
        GeoPoint(lat=6.45, lon=3.40),
        GeoPoint(lat=6.50, lon=3.36),
        GeoPoint(lat=-33.86, lon=151.21),
    ]
    for query in queries:
        assert find_nearest(query, LAGOS_BRANCHES).facility in LAGOS_BRANCHES


def test_find_nearest_breaks_ties_by_registry_order() -> None:
    west = Facility(id=9, name="West", lat=0.0, lon=-1.0)
    east = Facility(id=2, name="East", lat=0.0, lon=1.0)
    query = GeoPoint(lat=0.0, lon=0.0)

    assert find_nearest(query, (west, east)).facility is west
    assert find_nearest(query, (east, west)).facility is east


def test_find_nearest_rejects_empty_registry() -> None:
    with pytest.raises(ValueError):
        find_nearest(GeoPoint(lat=6.6, lon=3.35), ())
