from datetime import datetime
from enum import Enum
from typing import Optional

from beanie import Document
from pydantic import Field
from pymongo import IndexModel, ASCENDING

from garment_erp.core.db import collections
from garment_erp.shared.timezone import get_local_now


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"


class MonthlyExpense(Document):
    """Fixed overhead (rent, utilities...) booked once per month and category."""

    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=2000, le=2100)
    category: str
    amount: float = Field(..., ge=0)
    description: Optional[str] = None
    payment_date: Optional[str] = None
    payment_status: PaymentStatus = PaymentStatus.PENDING
    remarks: Optional[str] = None

    created_at: datetime = Field(default_factory=get_local_now)
    updated_at: datetime = Field(default_factory=get_local_now)

    class Settings:
        name = collections.MONTHLY_EXPENSES
        indexes = [
            IndexModel(
                [("year", ASCENDING), ("month", ASCENDING), ("category", ASCENDING)],
                unique=True,
            ),
        ]
