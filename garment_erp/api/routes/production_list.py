from fastapi import APIRouter, status, Depends, Query
from typing import List, Optional

from garment_erp.core.auth.deps import require_permission
from garment_erp.core.auth.permissions import Permission
from garment_erp.core.models.production_list import ProductionStatus
from garment_erp.core.schemas.auth import CurrentUser
from garment_erp.core.schemas.common import MessageResponse
from garment_erp.core.schemas.production_list import (
    ProductionItemCreate,
    ProductionItemUpdate,
    ProductionItemResponse,
)
from garment_erp.modules.production_list.production_list_service import ProductionListService


router = APIRouter(prefix="/production-list", tags=["Production List"])


@router.get(
    "",
    response_model=List[ProductionItemResponse],
    summary="List Styles",
    description="""
    All styles on the production list, newest first.

    **Caching:** the unfiltered list is served from Redis (24h TTL) and
    refreshed on every create / update / delete.
    """,
)
async def list_items(
    status_filter: Optional[ProductionStatus] = Query(None, alias="status"),
    buyer: Optional[str] = Query(None),
    current_user: CurrentUser = Depends(require_permission(Permission.READ_PRODUCTION))
):
    return await ProductionListService.list_items(status_filter, buyer)


@router.get("/style/{style_no}", response_model=ProductionItemResponse, summary="Get Style by Number")
async def get_by_style(
    style_no: str,
    current_user: CurrentUser = Depends(require_permission(Permission.READ_PRODUCTION))
):
    return await ProductionListService.get_by_style(style_no)


@router.get("/{item_id}", response_model=ProductionItemResponse, summary="Get Style")
async def get_item(
    item_id: str,
    current_user: CurrentUser = Depends(require_permission(Permission.READ_PRODUCTION))
):
    return await ProductionListService.get_item(item_id)


@router.post(
    "",
    response_model=ProductionItemResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Style",
    responses={409: {"description": "Style number already exists"}}
)
async def create_item(
    payload: ProductionItemCreate,
    current_user: CurrentUser = Depends(require_permission(Permission.CREATE_PRODUCTION))
):
    return await ProductionListService.create_item(payload)


@router.put("/{item_id}", response_model=ProductionItemResponse, summary="Update Style")
async def update_item(
    item_id: str,
    payload: ProductionItemUpdate,
    current_user: CurrentUser = Depends(require_permission(Permission.UPDATE_PRODUCTION))
):
    return await ProductionListService.update_item(item_id, payload)


@router.delete("/{item_id}", response_model=MessageResponse, summary="Delete Style")
async def delete_item(
    item_id: str,
    current_user: CurrentUser = Depends(require_permission(Permission.DELETE_PRODUCTION))
):
    await ProductionListService.delete_item(item_id)
    return {"detail": "Production item deleted"}
