from fastapi import APIRouter, status, Depends, HTTPException, Query
from typing import List, Optional
from motor.motor_asyncio import AsyncIOMotorDatabase

from garment_erp.core.auth.deps import require_permission
from garment_erp.core.auth.permissions import Permission
from garment_erp.core.db.mongodb import get_database
from garment_erp.core.mail.email_service import EmailService
from garment_erp.core.schemas.auth import CurrentUser
from garment_erp.core.schemas.common import MessageResponse
from garment_erp.core.schemas.daily_production import (
    DailyProductionReportResponse,
    DailyProductionSummaryResponse,
    TrendDay,
    ResyncRequest,
    ResyncResponse,
    EmailReportRequest,
)
from garment_erp.core.setting import config
from garment_erp.modules.daily_production import daily_production_service
from garment_erp.shared.date_utils import DATE_PATTERN
from garment_erp.shared.timezone import get_local_today


router = APIRouter(prefix="/daily-production", tags=["Daily Production"])


@router.get(
    "",
    response_model=List[DailyProductionReportResponse],
    summary="List Daily Production Reports",
    description="Derived report rows (read-only), filtered by date, style and/or line.",
)
async def list_reports(
    date: Optional[str] = Query(None, pattern=DATE_PATTERN),
    style_no: Optional[str] = Query(None),
    line_no: Optional[str] = Query(None),
    db: AsyncIOMotorDatabase = Depends(get_database),
    current_user: CurrentUser = Depends(require_permission(Permission.READ_REPORT, Permission.READ_PRODUCTION))
):
    return await daily_production_service.list_reports(db, date, style_no, line_no)


@router.get(
    "/summary",
    response_model=DailyProductionSummaryResponse,
    summary="Daily Production Summary",
    description="""
    One day's report rows with buyer/item details and totals.

    **Summary Fields:**
    - total_styles, total_target_qty, total_production_qty
    - total_amount, total_net_amount
    - overall_efficiency: mean of per-row production / target × 100
    """,
)
async def get_summary(
    date: Optional[str] = Query(None, pattern=DATE_PATTERN, description="Defaults to today"),
    db: AsyncIOMotorDatabase = Depends(get_database),
    current_user: CurrentUser = Depends(require_permission(Permission.READ_REPORT))
):
    return await daily_production_service.get_daily_production_summary(db, date or get_local_today())


@router.get(
    "/trends",
    response_model=List[TrendDay],
    summary="Production Trends",
    description="Per-day totals between start_date and end_date (inclusive), oldest first.",
)
async def get_trends(
    start_date: str = Query(..., pattern=DATE_PATTERN),
    end_date: str = Query(..., pattern=DATE_PATTERN),
    db: AsyncIOMotorDatabase = Depends(get_database),
    current_user: CurrentUser = Depends(require_permission(Permission.READ_REPORT))
):
    if start_date > end_date:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="start_date must be on or before end_date")
    return await daily_production_service.get_production_trends(db, start_date, end_date)


@router.post(
    "/resync",
    response_model=ResyncResponse,
    summary="Rebuild Reports from Targets",
    description="""
    Admin recovery for failed best-effort reconciliations.

    Rebuilds every report row of the date (optionally one style and/or
    line) from the stored targets; rows without production are removed.
    Keys whose style is missing are reported under `failed`.
    """,
)
async def resync(
    payload: ResyncRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
    current_user: CurrentUser = Depends(require_permission(Permission.MANAGE_SYSTEM))
):
    return await daily_production_service.resync_daily_production(
        db, payload.date, payload.style_no, payload.line_no
    )


@router.post(
    "/email",
    response_model=MessageResponse,
    summary="Email Daily Production Report",
    responses={400: {"description": "No recipients configured"}}
)
async def email_report(
    payload: EmailReportRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
    current_user: CurrentUser = Depends(require_permission(Permission.CREATE_REPORT))
):
    recipients = payload.recipients or config.REPORT_RECIPIENTS
    if not recipients:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No recipients configured")

    daily = await daily_production_service.get_daily_production_summary(db, payload.date)
    await EmailService.send_daily_production_report(recipients, payload.date, daily)
    return {"detail": f"Report for {payload.date} sent to {len(recipients)} recipient(s)"}
