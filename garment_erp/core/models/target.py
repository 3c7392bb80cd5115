from datetime import datetime

from beanie import Document
from pydantic import Field
from pymongo import ASCENDING, DESCENDING

from garment_erp.core.db import collections
from garment_erp.shared.timezone import get_local_now


class Target(Document):
    """
    One scheduled production slot on a line.

    Several targets may share (date, style_no, line_no) across time slots;
    their hourly_production values roll up into a DailyProductionReport.
    """

    line_no: str
    style_no: str
    date: str = Field(..., description="YYYY-MM-DD")
    in_time: str = Field(..., description="HH:MM")
    out_time: str = Field(..., description="HH:MM")
    line_target: int = Field(..., gt=0)
    hourly_production: int = Field(default=0, ge=0)

    created_at: datetime = Field(default_factory=get_local_now)
    updated_at: datetime = Field(default_factory=get_local_now)

    class Settings:
        name = collections.TARGETS
        indexes = [
            [("date", ASCENDING), ("style_no", ASCENDING), ("line_no", ASCENDING)],
            [("created_at", DESCENDING)],
        ]
