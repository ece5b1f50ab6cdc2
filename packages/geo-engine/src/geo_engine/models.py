from dataclasses import dataclass


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lon: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.lat <= 90.0:
            raise ValueError("lat must be within [-90, 90]")
        if not -180.0 <= self.lon <= 180.0:
            raise ValueError("lon must be within [-180, 180]")


@dataclass(frozen=True)
class Facility:
    id: int
    name: str
    lat: float
    lon: float

    @property
    def location(self) -> GeoPoint:
        return GeoPoint(lat=self.lat, lon=self.lon)


@dataclass(frozen=True)
class NearestMatch:
    facility: Facility
    distance_km: float
