from pydantic import BaseModel


class BranchItem(BaseModel):
    id: int
    name: str
    lat: float
    lon: float


class BranchAssignmentRequest(BaseModel):
    address: str | None = None


class BranchAssignment(BaseModel):
    nearestBranch: BranchItem
    distanceKm: float
