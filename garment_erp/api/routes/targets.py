from fastapi import APIRouter, status, Depends, Query
from typing import List, Optional
from motor.motor_asyncio import AsyncIOMotorDatabase

from garment_erp.core.auth.deps import require_permission
from garment_erp.core.auth.permissions import Permission
from garment_erp.core.db.mongodb import get_database
from garment_erp.core.schemas.auth import CurrentUser
from garment_erp.core.schemas.common import MessageResponse
from garment_erp.core.schemas.target import (
    TargetCreate,
    TargetUpdate,
    TargetResponse,
    BulkDeleteRequest,
    BulkDeleteResponse,
)
from garment_erp.modules.target.target_service import TargetService


router = APIRouter(prefix="/targets", tags=["Targets"])


@router.get(
    "",
    response_model=List[TargetResponse],
    summary="List Targets",
    description="Targets filtered by date, line and/or style. Newest date first, then line and slot.",
)
async def list_targets(
    date: Optional[str] = Query(None, description="YYYY-MM-DD"),
    line_no: Optional[str] = Query(None),
    style_no: Optional[str] = Query(None),
    current_user: CurrentUser = Depends(require_permission(Permission.READ_TARGET))
):
    return await TargetService.list_targets(date, line_no, style_no)


@router.get("/{target_id}", response_model=TargetResponse, summary="Get Target")
async def get_target(
    target_id: str,
    current_user: CurrentUser = Depends(require_permission(Permission.READ_TARGET))
):
    return await TargetService.get_target(target_id)


@router.post(
    "",
    response_model=TargetResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Target",
    description="""
    Record one production slot for a line.

    **Side Effect (best effort):**
    After the target is saved, the daily production report for
    (date, style_no, line_no) is rebuilt from all of that key's targets:
    - production_qty = Σ hourly_production
    - target_qty = max line_target
    - total_amount = production_qty × style price
    - net_amount = total_amount × percentage / 100 × 120

    The target is saved and returned even if that rebuild fails
    (e.g. the style is missing from the production list). Use
    `POST /daily-production/resync` to repair.
    """,
    responses={
        201: {"description": "Target created"},
        400: {"description": "Missing fields or invalid numeric values"},
    }
)
async def create_target(
    payload: TargetCreate,
    db: AsyncIOMotorDatabase = Depends(get_database),
    current_user: CurrentUser = Depends(require_permission(Permission.CREATE_TARGET))
):
    return await TargetService.create_target(db, payload)


@router.put(
    "/{target_id}",
    response_model=TargetResponse,
    summary="Update Target",
    description="""
    Update a target and rebuild its daily production report.

    If the date, style or line changes, the report of the previous key is
    rebuilt too (and removed when no production remains there).
    """,
)
async def update_target(
    target_id: str,
    payload: TargetUpdate,
    db: AsyncIOMotorDatabase = Depends(get_database),
    current_user: CurrentUser = Depends(require_permission(Permission.UPDATE_TARGET))
):
    return await TargetService.update_target(db, target_id, payload)


@router.delete(
    "/{target_id}",
    response_model=MessageResponse,
    summary="Delete Target",
    description="Delete a target; the report row for its key is rebuilt or removed when production drops to 0.",
)
async def delete_target(
    target_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
    current_user: CurrentUser = Depends(require_permission(Permission.DELETE_TARGET))
):
    await TargetService.delete_target(db, target_id)
    return {"detail": "Target deleted"}


@router.post(
    "/bulk-delete",
    response_model=BulkDeleteResponse,
    summary="Bulk Delete Targets",
    description="Delete several targets at once; every affected report key is rebuilt once afterwards.",
    responses={404: {"description": "None of the ids exist"}}
)
async def bulk_delete_targets(
    payload: BulkDeleteRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
    current_user: CurrentUser = Depends(require_permission(Permission.DELETE_TARGET))
):
    return await TargetService.bulk_delete_targets(db, payload.ids)
