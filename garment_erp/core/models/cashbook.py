from datetime import datetime
from enum import Enum
from typing import Optional

from beanie import Document
from pydantic import Field
from pymongo import ASCENDING, DESCENDING

from garment_erp.core.db import collections
from garment_erp.shared.timezone import get_local_now

DAILY_EXPENSE_CATEGORY = "Daily Expense"
CASH_RECEIVED_CATEGORY = "Cash Received"


class CashbookType(str, Enum):
    DEBIT = "DEBIT"
    CREDIT = "CREDIT"


class CashbookEntry(Document):
    date: str = Field(..., description="YYYY-MM-DD")
    type: CashbookType
    amount: float = Field(..., gt=0)
    category: str
    description: Optional[str] = None
    line_no: Optional[str] = None
    reference_type: Optional[str] = None
    reference_id: Optional[str] = None
    created_by: Optional[str] = None

    created_at: datetime = Field(default_factory=get_local_now)
    updated_at: datetime = Field(default_factory=get_local_now)

    class Settings:
        name = collections.CASHBOOK_ENTRIES
        indexes = [
            [("date", DESCENDING), ("created_at", DESCENDING)],
            [("type", ASCENDING), ("category", ASCENDING), ("date", ASCENDING)],
        ]
