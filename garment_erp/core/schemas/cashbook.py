from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from garment_erp.core.models.cashbook import CashbookType
from garment_erp.core.schemas.common import DocumentResponse
from garment_erp.shared.date_utils import DATE_PATTERN


class CashbookEntryCreate(BaseModel):
    date: str = Field(..., pattern=DATE_PATTERN, description="YYYY-MM-DD")
    type: CashbookType
    amount: float = Field(..., gt=0)
    category: str = Field(..., min_length=1)
    description: Optional[str] = None
    line_no: Optional[str] = None
    reference_type: Optional[str] = None
    reference_id: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "date": "2026-10-17",
                "type": "DEBIT",
                "amount": 1500,
                "category": "Daily Expense",
                "description": "Thread and needles"
            }
        }


class CashbookEntryUpdate(BaseModel):
    date: Optional[str] = Field(None, pattern=DATE_PATTERN)
    type: Optional[CashbookType] = None
    amount: Optional[float] = Field(None, gt=0)
    category: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    line_no: Optional[str] = None


class CashbookEntryResponse(DocumentResponse):
    date: str
    type: CashbookType
    amount: float
    category: str
    description: Optional[str] = None
    line_no: Optional[str] = None
    reference_type: Optional[str] = None
    reference_id: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    running_balance: Optional[float] = None


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class CashbookListResponse(BaseModel):
    entries: List[CashbookEntryResponse]
    pagination: Pagination


class CashbookMonthlySummary(BaseModel):
    month: str
    total_credit: float
    total_debit: float
    balance: float
    debit_by_category: Dict[str, float]
    credit_by_category: Dict[str, float]
    entry_count: int
