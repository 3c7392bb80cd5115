from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from garment_erp.core.models.expense import PaymentStatus
from garment_erp.core.schemas.common import DocumentResponse
from garment_erp.shared.date_utils import DATE_PATTERN


class MonthlyExpenseCreate(BaseModel):
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=2000, le=2100)
    category: str = Field(..., min_length=1)
    amount: float = Field(..., ge=0)
    description: Optional[str] = None
    payment_date: Optional[str] = Field(None, pattern=DATE_PATTERN)
    payment_status: PaymentStatus = PaymentStatus.PENDING
    remarks: Optional[str] = None


class MonthlyExpenseUpdate(BaseModel):
    category: Optional[str] = Field(None, min_length=1)
    amount: Optional[float] = Field(None, ge=0)
    description: Optional[str] = None
    payment_date: Optional[str] = Field(None, pattern=DATE_PATTERN)
    payment_status: Optional[PaymentStatus] = None
    remarks: Optional[str] = None


class MonthlyExpenseResponse(DocumentResponse):
    month: int
    year: int
    category: str
    amount: float
    description: Optional[str] = None
    payment_date: Optional[str] = None
    payment_status: PaymentStatus
    remarks: Optional[str] = None
    created_at: Optional[datetime] = None
