from fastapi import APIRouter, status, Depends, HTTPException, Query
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorDatabase

from garment_erp.core.auth.deps import require_permission
from garment_erp.core.auth.permissions import Permission
from garment_erp.core.db.mongodb import get_database
from garment_erp.core.schemas.auth import CurrentUser
from garment_erp.core.schemas.profit_loss import ProfitLossResponse
from garment_erp.modules.profit_loss import profit_loss_service
from garment_erp.shared.date_utils import DATE_PATTERN, MONTH_PATTERN


router = APIRouter(prefix="/profit-loss", tags=["Profit & Loss"])


@router.get(
    "",
    response_model=ProfitLossResponse,
    summary="Profit & Loss Statement",
    description="""
    Computed on every request from the production, salary, cashbook and
    monthly expense ledgers.

    **Period:** `month=YYYY-MM` (default: current month) or an explicit
    `start_date` + `end_date`. Monthly expenses are taken from the month
    of the period's start date.

    **Formula:**
    ```
    daily_equivalent = monthly_expenses / 30
    net_profit = earnings - (daily_salary + daily_cash_expenses + daily_equivalent)
    ```
    - earnings: Σ net_amount of daily production reports
    - daily_cash_expenses: cashbook DEBIT entries in category `Daily Expense`

    **Breakdowns:** per date (oldest first) and per line (best net profit
    first), plus the top and worst five lines.
    """,
    responses={400: {"description": "Invalid month or date range"}}
)
async def get_profit_loss(
    month: Optional[str] = Query(None, pattern=MONTH_PATTERN),
    start_date: Optional[str] = Query(None, pattern=DATE_PATTERN),
    end_date: Optional[str] = Query(None, pattern=DATE_PATTERN),
    db: AsyncIOMotorDatabase = Depends(get_database),
    current_user: CurrentUser = Depends(require_permission(Permission.READ_REPORT))
):
    try:
        if start_date or end_date:
            if not (start_date and end_date):
                raise ValueError("start_date and end_date must be given together")
            return await profit_loss_service.calculate_profit_loss(db, start_date, end_date)
        return await profit_loss_service.calculate_monthly_profit_loss(db, month)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
