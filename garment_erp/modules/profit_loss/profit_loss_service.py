"""
Profit & loss rollup over the production, salary, cashbook and monthly
expense ledgers. Computed on every call; nothing is persisted.
"""

from typing import Any, Dict, Optional
import logging

from motor.motor_asyncio import AsyncIOMotorDatabase

from garment_erp.core.db import collections
from garment_erp.core.models.cashbook import CashbookType, DAILY_EXPENSE_CATEGORY
from garment_erp.core.monitoring.prometheus_middleware import update_net_profit
from garment_erp.modules.profit_loss.profit_loss_calculator import ProfitLossCalculator
from garment_erp.shared.date_utils import month_bounds, month_label, parse_date, parse_month
from garment_erp.shared.timezone import get_local_now


logger = logging.getLogger(__name__)


async def calculate_profit_loss(
    db: AsyncIOMotorDatabase,
    start_date: str,
    end_date: str,
) -> Dict[str, Any]:
    """
    Profit & loss between two YYYY-MM-DD dates (inclusive).

    Monthly expenses are those booked for the month containing start_date.
    """
    start = parse_date(start_date)
    parse_date(end_date)
    if start_date > end_date:
        raise ValueError("start_date must be on or before end_date")

    date_range = {"date": {"$gte": start_date, "$lte": end_date}}

    production = await db[collections.DAILY_PRODUCTION_REPORTS].find(
        date_range, {"date": 1, "net_amount": 1, "line_no": 1, "style_no": 1}
    ).to_list(None)
    salaries = await db[collections.DAILY_SALARIES].find(
        date_range, {"date": 1, "section": 1, "total_amount": 1}
    ).to_list(None)
    cash_expenses = await db[collections.CASHBOOK_ENTRIES].find(
        {**date_range, "type": CashbookType.DEBIT.value, "category": DAILY_EXPENSE_CATEGORY},
        {"date": 1, "amount": 1, "description": 1},
    ).to_list(None)
    monthly_expenses = await db[collections.MONTHLY_EXPENSES].find(
        {"year": start.year, "month": start.month}, {"amount": 1, "category": 1}
    ).to_list(None)

    summary = ProfitLossCalculator.calculate_summary(
        production, salaries, cash_expenses, monthly_expenses
    )
    monthly_total = sum(float(m.get("amount") or 0) for m in monthly_expenses)

    lines = ProfitLossCalculator.line_breakdown(production, monthly_total)
    top_lines, worst_lines = ProfitLossCalculator.rank_lines(lines)

    logger.info(
        f"📈 P&L {start_date}..{end_date}: earnings={summary['total_earnings']}, "
        f"expenses={summary['total_expenses']}, net={summary['net_profit']}"
    )

    return {
        "period": {
            "month": month_label(start.year, start.month),
            "start_date": start_date,
            "end_date": end_date,
        },
        "summary": summary,
        "daily_breakdown": ProfitLossCalculator.daily_breakdown(
            production, salaries, cash_expenses, monthly_total
        ),
        "line_breakdown": lines,
        "top_performing_lines": top_lines,
        "worst_performing_lines": worst_lines,
    }


async def calculate_monthly_profit_loss(
    db: AsyncIOMotorDatabase,
    month: Optional[str] = None,
) -> Dict[str, Any]:
    """Profit & loss for a YYYY-MM month, defaulting to the current month."""
    if month:
        year, month_num = parse_month(month)
    else:
        now = get_local_now()
        year, month_num = now.year, now.month

    start_date, end_date = month_bounds(year, month_num)
    result = await calculate_profit_loss(db, start_date, end_date)
    update_net_profit(f"{year}-{str(month_num).zfill(2)}", result["summary"]["net_profit"])
    return result
