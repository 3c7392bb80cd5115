from fastapi import APIRouter, status, Depends, Query
from typing import List, Optional

from garment_erp.core.auth.deps import require_permission
from garment_erp.core.auth.permissions import Permission
from garment_erp.core.schemas.auth import CurrentUser
from garment_erp.core.schemas.common import MessageResponse
from garment_erp.core.schemas.shipment import (
    ShipmentCreate,
    ShipmentUpdate,
    ShipmentResponse,
    StyleShipmentStatus,
)
from garment_erp.modules.shipments.shipment_service import ShipmentService


router = APIRouter(prefix="/shipments", tags=["Shipments"])


@router.get("", response_model=List[ShipmentResponse], summary="List Shipments")
async def list_shipments(
    style_no: Optional[str] = Query(None),
    current_user: CurrentUser = Depends(require_permission(Permission.READ_SHIPMENT))
):
    return await ShipmentService.list_shipments(style_no)


@router.get("/status/{style_no}", response_model=StyleShipmentStatus, summary="Shipped vs Ordered")
async def style_status(
    style_no: str,
    current_user: CurrentUser = Depends(require_permission(Permission.READ_SHIPMENT))
):
    return await ShipmentService.style_status(style_no)


@router.post(
    "",
    response_model=ShipmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Log Shipment",
    description="""
    Log a shipment against a style.

    **Business Rules:**
    - Style must exist (404)
    - Cumulative shipped quantity may not exceed the style's total_qty (400)
    """,
)
async def create_shipment(
    payload: ShipmentCreate,
    current_user: CurrentUser = Depends(require_permission(Permission.CREATE_SHIPMENT))
):
    return await ShipmentService.create_shipment(payload)


@router.put("/{shipment_id}", response_model=ShipmentResponse, summary="Update Shipment")
async def update_shipment(
    shipment_id: str,
    payload: ShipmentUpdate,
    current_user: CurrentUser = Depends(require_permission(Permission.UPDATE_SHIPMENT))
):
    return await ShipmentService.update_shipment(shipment_id, payload)


@router.delete("/{shipment_id}", response_model=MessageResponse, summary="Delete Shipment")
async def delete_shipment(
    shipment_id: str,
    current_user: CurrentUser = Depends(require_permission(Permission.DELETE_SHIPMENT))
):
    await ShipmentService.delete_shipment(shipment_id)
    return {"detail": "Shipment deleted"}
