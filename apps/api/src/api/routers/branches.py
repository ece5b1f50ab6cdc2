from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from devkit.config import ServiceSettings

from api.cancellation import run_until_disconnect
from api.dependencies import get_branch_service, get_settings
from api.schemas.branch import BranchAssignment, BranchAssignmentRequest, BranchItem
from api.services.branch_service import BranchService

router = APIRouter(tags=["branches"])


@router.post("/assign-branch", response_model=BranchAssignment)
async def assign_branch(
    body: BranchAssignmentRequest,
    request: Request,
    service: BranchService = Depends(get_branch_service),
    settings: ServiceSettings = Depends(get_settings),
) -> BranchAssignment:
    return await run_until_disconnect(
        request,
        lambda: service.assign_branch(body.address),
        enabled=settings.CANCEL_ON_CLIENT_DISCONNECT,
    )


@router.get("/branches", response_model=list[BranchItem])
async def list_branches(service: BranchService = Depends(get_branch_service)) -> list[BranchItem]:
    return service.list_branches()
