from datetime import datetime

from beanie import Document
from pydantic import Field
from pymongo import IndexModel, ASCENDING

from garment_erp.core.db import collections
from garment_erp.shared.timezone import get_local_now


class DailyProductionReport(Document):
    """
    Derived daily rollup per (date, style_no, line_no).

    Never written by users. Maintained by the target reconciler so that
    production_qty always equals the summed hourly_production of the
    matching targets; the row is removed when that sum reaches zero.
    """

    date: str = Field(..., description="YYYY-MM-DD")
    style_no: str
    line_no: str
    target_qty: int = 0
    production_qty: int = 0
    unit_price: float = 0.0
    total_amount: float = 0.0
    net_amount: float = 0.0

    created_at: datetime = Field(default_factory=get_local_now)
    updated_at: datetime = Field(default_factory=get_local_now)

    class Settings:
        name = collections.DAILY_PRODUCTION_REPORTS
        indexes = [
            IndexModel(
                [("date", ASCENDING), ("style_no", ASCENDING), ("line_no", ASCENDING)],
                unique=True,
            ),
        ]
