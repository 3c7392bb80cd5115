from fastapi import APIRouter, Depends

from garment_erp.core.auth.deps import require_permission
from garment_erp.core.auth.permissions import Permission
from garment_erp.core.schemas.auth import CurrentUser
from garment_erp.core.schemas.common import MessageResponse
from garment_erp.core.schemas.salary import DailySalarySubmit, DailySalaryDayResponse
from garment_erp.modules.salary.salary_service import SalaryService


router = APIRouter(prefix="/salary", tags=["Daily Salary"])


@router.get("/{date}", response_model=DailySalaryDayResponse, summary="Get Daily Salary")
async def get_day(
    date: str,
    current_user: CurrentUser = Depends(require_permission(Permission.READ_CASHBOOK, Permission.READ_EXPENSE))
):
    return await SalaryService.get_day(date)


@router.post(
    "",
    response_model=DailySalaryDayResponse,
    summary="Submit Daily Salary",
    description="""
    Replace all section rows of a date.

    **Automatic Calculations:**
    - regular_amount = worker_count × regular_rate
    - overtime_amount = overtime_hours × overtime_rate
    - total_amount = regular_amount + overtime_amount
    """,
)
async def submit_day(
    payload: DailySalarySubmit,
    current_user: CurrentUser = Depends(require_permission(Permission.CREATE_EXPENSE, Permission.CREATE_CASHBOOK))
):
    return await SalaryService.submit_day(payload)


@router.delete("/{date}", response_model=MessageResponse, summary="Delete Daily Salary")
async def delete_day(
    date: str,
    current_user: CurrentUser = Depends(require_permission(Permission.DELETE_EXPENSE, Permission.DELETE_CASHBOOK))
):
    deleted = await SalaryService.delete_day(date)
    return {"detail": f"Deleted {deleted} salary rows for {date}"}
