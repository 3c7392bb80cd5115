from fastapi import APIRouter, status, Depends, Query
from typing import List, Optional

from garment_erp.core.auth.deps import require_permission
from garment_erp.core.auth.permissions import Permission
from garment_erp.core.schemas.auth import CurrentUser
from garment_erp.core.schemas.common import MessageResponse
from garment_erp.core.schemas.line import (
    LineCreate,
    LineUpdate,
    LineResponse,
    LineAssignmentCreate,
    LineAssignmentClose,
    LineAssignmentResponse,
)
from garment_erp.modules.lines.line_service import LineService, LineAssignmentService


router = APIRouter(prefix="/lines", tags=["Lines"])
assignment_router = APIRouter(prefix="/line-assignments", tags=["Line Assignments"])


@router.get("", response_model=List[LineResponse], summary="List Lines")
async def list_lines(
    active_only: bool = Query(False),
    current_user: CurrentUser = Depends(require_permission(Permission.READ_LINE))
):
    return await LineService.list_lines(active_only)


@router.post(
    "",
    response_model=LineResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Line",
    responses={409: {"description": "Line code already exists"}}
)
async def create_line(
    payload: LineCreate,
    current_user: CurrentUser = Depends(require_permission(Permission.CREATE_LINE))
):
    return await LineService.create_line(payload)


@router.put("/{line_id}", response_model=LineResponse, summary="Update Line")
async def update_line(
    line_id: str,
    payload: LineUpdate,
    current_user: CurrentUser = Depends(require_permission(Permission.UPDATE_LINE))
):
    return await LineService.update_line(line_id, payload)


@router.delete(
    "/{line_id}",
    response_model=MessageResponse,
    summary="Delete Line",
    responses={409: {"description": "Line has an active assignment"}}
)
async def delete_line(
    line_id: str,
    current_user: CurrentUser = Depends(require_permission(Permission.DELETE_LINE))
):
    await LineService.delete_line(line_id)
    return {"detail": "Line deleted"}


@assignment_router.get("", response_model=List[LineAssignmentResponse], summary="List Line Assignments")
async def list_assignments(
    line_code: Optional[str] = Query(None),
    active_only: bool = Query(False),
    current_user: CurrentUser = Depends(require_permission(Permission.READ_LINE))
):
    return await LineAssignmentService.list_assignments(line_code, active_only)


@assignment_router.post(
    "",
    response_model=LineAssignmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Assign Style to Line",
    description="""
    Put a style on a line.

    **Business Rules:**
    - Line and style must both exist (404 otherwise)
    - A line carries one open assignment at a time (409 otherwise);
      close the current one first
    """,
    responses={
        404: {"description": "Line or style not found"},
        409: {"description": "Line already has an active assignment"},
    }
)
async def create_assignment(
    payload: LineAssignmentCreate,
    current_user: CurrentUser = Depends(require_permission(Permission.CREATE_LINE))
):
    return await LineAssignmentService.create_assignment(payload)


@assignment_router.post(
    "/{assignment_id}/close",
    response_model=LineAssignmentResponse,
    summary="Close Line Assignment",
)
async def close_assignment(
    assignment_id: str,
    payload: LineAssignmentClose,
    current_user: CurrentUser = Depends(require_permission(Permission.UPDATE_LINE))
):
    return await LineAssignmentService.close_assignment(assignment_id, payload)


@assignment_router.delete("/{assignment_id}", response_model=MessageResponse, summary="Delete Line Assignment")
async def delete_assignment(
    assignment_id: str,
    current_user: CurrentUser = Depends(require_permission(Permission.DELETE_LINE))
):
    await LineAssignmentService.delete_assignment(assignment_id)
    return {"detail": "Line assignment deleted"}
