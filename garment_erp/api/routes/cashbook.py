from fastapi import APIRouter, status, Depends, Query
from typing import Optional

from garment_erp.core.auth.deps import require_permission
from garment_erp.core.auth.permissions import Permission
from garment_erp.core.models.cashbook import CashbookType
from garment_erp.core.schemas.auth import CurrentUser
from garment_erp.core.schemas.common import MessageResponse
from garment_erp.core.schemas.cashbook import (
    CashbookEntryCreate,
    CashbookEntryUpdate,
    CashbookEntryResponse,
    CashbookListResponse,
    CashbookMonthlySummary,
)
from garment_erp.modules.cashbook.cashbook_service import CashbookService
from garment_erp.shared.date_utils import DATE_PATTERN, MONTH_PATTERN


router = APIRouter(prefix="/cashbook", tags=["Cashbook"])


@router.get(
    "",
    response_model=CashbookListResponse,
    summary="List Cashbook Entries",
    description="""
    Paginated entries, newest first.

    **running_balance:** accumulated over the returned page in listing
    order; CREDIT adds, DEBIT subtracts.
    """,
)
async def list_entries(
    date: Optional[str] = Query(None, pattern=DATE_PATTERN),
    entry_type: Optional[CashbookType] = Query(None, alias="type"),
    category: Optional[str] = Query(None, description="Case-insensitive substring"),
    line_no: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=500),
    current_user: CurrentUser = Depends(require_permission(Permission.READ_CASHBOOK))
):
    return await CashbookService.list_entries(date, entry_type, category, line_no, page, limit)


@router.get("/summary", response_model=CashbookMonthlySummary, summary="Monthly Cashbook Summary")
async def monthly_summary(
    month: str = Query(..., pattern=MONTH_PATTERN, description="YYYY-MM"),
    current_user: CurrentUser = Depends(require_permission(Permission.READ_CASHBOOK))
):
    return await CashbookService.monthly_summary(month)


@router.get("/{entry_id}", response_model=CashbookEntryResponse, summary="Get Cashbook Entry")
async def get_entry(
    entry_id: str,
    current_user: CurrentUser = Depends(require_permission(Permission.READ_CASHBOOK))
):
    return await CashbookService.get_entry(entry_id)


@router.post(
    "",
    response_model=CashbookEntryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Cashbook Entry",
    description="""
    Record a cash movement.

    **Profit & Loss:** DEBIT entries with category `Daily Expense` are the
    daily cash expenses of the P&L statement.
    """,
)
async def create_entry(
    payload: CashbookEntryCreate,
    current_user: CurrentUser = Depends(require_permission(Permission.CREATE_CASHBOOK))
):
    return await CashbookService.create_entry(payload, current_user)


@router.put("/{entry_id}", response_model=CashbookEntryResponse, summary="Update Cashbook Entry")
async def update_entry(
    entry_id: str,
    payload: CashbookEntryUpdate,
    current_user: CurrentUser = Depends(require_permission(Permission.UPDATE_CASHBOOK))
):
    return await CashbookService.update_entry(entry_id, payload)


@router.delete("/{entry_id}", response_model=MessageResponse, summary="Delete Cashbook Entry")
async def delete_entry(
    entry_id: str,
    current_user: CurrentUser = Depends(require_permission(Permission.DELETE_CASHBOOK))
):
    await CashbookService.delete_entry(entry_id)
    return {"detail": "Cashbook entry deleted"}
