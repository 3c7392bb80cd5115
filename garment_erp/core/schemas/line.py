from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from garment_erp.core.schemas.common import DocumentResponse
from garment_erp.shared.date_utils import DATE_PATTERN


class LineCreate(BaseModel):
    code: str = Field(..., min_length=1, description="Line code, e.g. 'L-01'")
    name: str = Field(..., min_length=1)
    is_active: bool = True


class LineUpdate(BaseModel):
    name: Optional[str] = None
    is_active: Optional[bool] = None


class LineResponse(DocumentResponse):
    code: str
    name: str
    is_active: bool
    created_at: Optional[datetime] = None


class LineAssignmentCreate(BaseModel):
    line_code: str
    style_no: str
    target_per_hour: Optional[int] = Field(None, ge=0)
    start_date: str = Field(..., pattern=DATE_PATTERN, description="YYYY-MM-DD")

    class Config:
        json_schema_extra = {
            "example": {
                "line_code": "L-01",
                "style_no": "ST-2041",
                "target_per_hour": 120,
                "start_date": "2026-10-01"
            }
        }


class LineAssignmentClose(BaseModel):
    end_date: str = Field(..., pattern=DATE_PATTERN, description="YYYY-MM-DD")


class LineAssignmentResponse(DocumentResponse):
    line_code: str
    style_no: str
    target_per_hour: Optional[int] = None
    start_date: str
    end_date: Optional[str] = None
    created_at: Optional[datetime] = None
