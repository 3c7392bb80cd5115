from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from garment_erp.core.schemas.common import DocumentResponse
from garment_erp.shared.date_utils import DATE_PATTERN


class SalarySectionInput(BaseModel):
    section: str = Field(..., min_length=1)
    worker_count: int = Field(default=0, ge=0)
    regular_rate: float = Field(default=0, ge=0)
    overtime_hours: float = Field(default=0, ge=0)
    overtime_rate: float = Field(default=0, ge=0)
    remarks: Optional[str] = None


class DailySalarySubmit(BaseModel):
    date: str = Field(..., pattern=DATE_PATTERN)
    records: List[SalarySectionInput] = Field(..., min_length=1)

    class Config:
        json_schema_extra = {
            "example": {
                "date": "2026-10-17",
                "records": [
                    {"section": "Sewing", "worker_count": 40, "regular_rate": 500,
                     "overtime_hours": 20, "overtime_rate": 60}
                ]
            }
        }


class DailySalaryResponse(DocumentResponse):
    date: str
    section: str
    worker_count: int
    regular_rate: float
    overtime_hours: float
    overtime_rate: float
    regular_amount: float
    overtime_amount: float
    total_amount: float
    remarks: Optional[str] = None
    created_at: Optional[datetime] = None


class DailySalarySummary(BaseModel):
    total_workers: int
    total_regular_amount: float
    total_overtime_amount: float
    total_amount: float


class DailySalaryDayResponse(BaseModel):
    date: str
    records: List[DailySalaryResponse]
    summary: DailySalarySummary
