from fastapi import APIRouter, status, Depends, Query
from typing import List, Optional

from garment_erp.core.auth.deps import require_permission
from garment_erp.core.auth.permissions import Permission
from garment_erp.core.schemas.auth import CurrentUser
from garment_erp.core.schemas.common import MessageResponse
from garment_erp.core.schemas.expense import (
    MonthlyExpenseCreate,
    MonthlyExpenseUpdate,
    MonthlyExpenseResponse,
)
from garment_erp.modules.expenses.expense_service import MonthlyExpenseService


router = APIRouter(prefix="/expenses/monthly", tags=["Monthly Expenses"])


@router.get("", response_model=List[MonthlyExpenseResponse], summary="List Monthly Expenses")
async def list_expenses(
    year: Optional[int] = Query(None),
    month: Optional[int] = Query(None, ge=1, le=12),
    current_user: CurrentUser = Depends(require_permission(Permission.READ_EXPENSE))
):
    return await MonthlyExpenseService.list_expenses(year, month)


@router.post(
    "",
    response_model=MonthlyExpenseResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Monthly Expense",
    description="""
    Book a fixed overhead for a month.

    **Business Rules:**
    - One row per (year, month, category) (409 otherwise)
    - The month's total is spread as total / 30 per day in the P&L statement
    """,
    responses={409: {"description": "Category already booked for the month"}}
)
async def create_expense(
    payload: MonthlyExpenseCreate,
    current_user: CurrentUser = Depends(require_permission(Permission.CREATE_EXPENSE))
):
    return await MonthlyExpenseService.create_expense(payload)


@router.put("/{expense_id}", response_model=MonthlyExpenseResponse, summary="Update Monthly Expense")
async def update_expense(
    expense_id: str,
    payload: MonthlyExpenseUpdate,
    current_user: CurrentUser = Depends(require_permission(Permission.UPDATE_EXPENSE))
):
    return await MonthlyExpenseService.update_expense(expense_id, payload)


@router.delete("/{expense_id}", response_model=MessageResponse, summary="Delete Monthly Expense")
async def delete_expense(
    expense_id: str,
    current_user: CurrentUser = Depends(require_permission(Permission.DELETE_EXPENSE))
):
    await MonthlyExpenseService.delete_expense(expense_id)
    return {"detail": "Monthly expense deleted"}
