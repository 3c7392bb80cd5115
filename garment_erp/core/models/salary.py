from datetime import datetime
from typing import Optional

from beanie import Document
from pydantic import Field
from pymongo import ASCENDING

from garment_erp.core.db import collections
from garment_erp.shared.timezone import get_local_now


class DailySalary(Document):
    """Labour cost of one section for one day."""

    date: str = Field(..., description="YYYY-MM-DD")
    section: str
    worker_count: int = Field(default=0, ge=0)
    regular_rate: float = Field(default=0, ge=0)
    overtime_hours: float = Field(default=0, ge=0)
    overtime_rate: float = Field(default=0, ge=0)

    # AUTO-CALCULATED
    regular_amount: float = 0.0
    overtime_amount: float = 0.0
    total_amount: float = 0.0

    remarks: Optional[str] = None
    created_at: datetime = Field(default_factory=get_local_now)

    class Settings:
        name = collections.DAILY_SALARIES
        indexes = [
            [("date", ASCENDING), ("section", ASCENDING)],
        ]
