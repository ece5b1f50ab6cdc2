from __future__ import annotations

import logging
from typing import Protocol

from geo_engine.models import Facility, GeoPoint
from geo_engine.nearest import find_nearest

from api.errors import ValidationError
from api.repositories.branch_repository import BranchRepository
from api.schemas.branch import BranchAssignment, BranchItem

logger = logging.getLogger(__name__)


class Geocoder(Protocol):
    async def geocode(self, address: str) -> GeoPoint: ...


def _to_item(facility: Facility) -> BranchItem:
    return BranchItem(id=facility.id, name=facility.name, lat=facility.lat, lon=facility.lon)


class BranchService:
    def __init__(self, repository: BranchRepository, geocoder: Geocoder) -> None:
        self._repository = repository
        self._geocoder = geocoder

    def list_branches(self) -> list[BranchItem]:
        return [_to_item(facility) for facility in self._repository.list_branches()]

    async def assign_branch(self, address: str | None) -> BranchAssignment:
        if not address or not address.strip():
            raise ValidationError("Address is required")

        coordinates = await self._geocoder.geocode(address)
        match = find_nearest(coordinates, self._repository.list_branches())
        logger.info(
            "branch_assigned",
            extra={
                "component": "branches",
                "branch_id": match.facility.id,
                "distance_km": match.distance_km,
            },
        )
        return BranchAssignment(
            nearestBranch=_to_item(match.facility),
            distanceKm=round(match.distance_km, 2),
        )
