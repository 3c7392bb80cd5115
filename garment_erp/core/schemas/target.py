from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from garment_erp.core.schemas.common import DocumentResponse
from garment_erp.shared.date_utils import DATE_PATTERN, TIME_PATTERN


class TargetCreate(BaseModel):
    line_no: str = Field(..., min_length=1)
    style_no: str = Field(..., min_length=1)
    date: str = Field(..., pattern=DATE_PATTERN, description="YYYY-MM-DD")
    in_time: str = Field(..., pattern=TIME_PATTERN, description="HH:MM (24h)")
    out_time: str = Field(..., pattern=TIME_PATTERN, description="HH:MM (24h)")
    line_target: int = Field(..., gt=0, description="Planned pieces for the slot")
    hourly_production: int = Field(default=0, ge=0, description="Actual pieces produced")

    class Config:
        json_schema_extra = {
            "example": {
                "line_no": "L-01",
                "style_no": "ST-2041",
                "date": "2026-10-17",
                "in_time": "08:00",
                "out_time": "09:00",
                "line_target": 120,
                "hourly_production": 112
            }
        }


class TargetUpdate(BaseModel):
    line_no: Optional[str] = Field(None, min_length=1)
    style_no: Optional[str] = Field(None, min_length=1)
    date: Optional[str] = Field(None, pattern=DATE_PATTERN)
    in_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    out_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    line_target: Optional[int] = Field(None, gt=0)
    hourly_production: Optional[int] = Field(None, ge=0)


class BulkDeleteRequest(BaseModel):
    ids: List[str] = Field(..., min_length=1)


class TargetResponse(DocumentResponse):
    line_no: str
    style_no: str
    date: str
    in_time: str
    out_time: str
    line_target: int
    hourly_production: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BulkDeleteResponse(BaseModel):
    deleted_count: int
    not_found: List[str] = []
