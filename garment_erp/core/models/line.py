from datetime import datetime
from typing import Optional

from beanie import Document
from pydantic import Field
from pymongo import IndexModel, ASCENDING

from garment_erp.core.db import collections
from garment_erp.shared.timezone import get_local_now


class Line(Document):
    """A physical sewing line."""

    code: str = Field(..., description="Line code, e.g. 'L-01'")
    name: str
    is_active: bool = True
    created_at: datetime = Field(default_factory=get_local_now)
    updated_at: datetime = Field(default_factory=get_local_now)

    class Settings:
        name = collections.LINES
        indexes = [
            IndexModel([("code", ASCENDING)], unique=True),
        ]


class LineAssignment(Document):
    """Which style a line is currently sewing. Open while end_date is None."""

    line_code: str
    style_no: str
    target_per_hour: Optional[int] = Field(None, ge=0)
    start_date: str = Field(..., description="YYYY-MM-DD")
    end_date: Optional[str] = Field(None, description="YYYY-MM-DD; None while active")
    created_at: datetime = Field(default_factory=get_local_now)

    class Settings:
        name = collections.LINE_ASSIGNMENTS
        indexes = [
            [("line_code", ASCENDING), ("end_date", ASCENDING)],
            [("style_no", ASCENDING)],
        ]
