from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from garment_erp.core.schemas.common import DocumentResponse
from garment_erp.shared.date_utils import DATE_PATTERN


class ShipmentCreate(BaseModel):
    date: str = Field(..., pattern=DATE_PATTERN)
    style_no: str = Field(..., min_length=1)
    quantity: int = Field(..., gt=0)
    destination: str = Field(..., min_length=1)
    awb_or_container: Optional[str] = None
    remarks: Optional[str] = None


class ShipmentUpdate(BaseModel):
    date: Optional[str] = Field(None, pattern=DATE_PATTERN)
    quantity: Optional[int] = Field(None, gt=0)
    destination: Optional[str] = None
    awb_or_container: Optional[str] = None
    remarks: Optional[str] = None


class ShipmentResponse(DocumentResponse):
    date: str
    style_no: str
    quantity: int
    destination: str
    awb_or_container: Optional[str] = None
    remarks: Optional[str] = None
    created_at: Optional[datetime] = None


class StyleShipmentStatus(BaseModel):
    style_no: str
    total_qty: int
    shipped_qty: int
    remaining_qty: int
