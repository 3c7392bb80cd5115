from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from garment_erp.core.models.production_list import ProductionStatus
from garment_erp.core.schemas.common import DocumentResponse


class ProductionItemCreate(BaseModel):
    style_no: str = Field(..., min_length=1, description="Unique style / program code")
    buyer: str = Field(..., min_length=1)
    item: str = Field(..., min_length=1, description="Garment description")
    total_qty: int = Field(..., gt=0)
    price: float = Field(..., gt=0, description="Unit price (USD)")
    percentage: float = Field(default=0, ge=0, le=100)
    status: ProductionStatus = ProductionStatus.PENDING
    notes: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "style_no": "ST-2041",
                "buyer": "H&M",
                "item": "Men's Polo Shirt",
                "total_qty": 12000,
                "price": 2.35,
                "percentage": 18,
                "status": "RUNNING"
            }
        }


class ProductionItemUpdate(BaseModel):
    buyer: Optional[str] = None
    item: Optional[str] = None
    total_qty: Optional[int] = Field(None, gt=0)
    price: Optional[float] = Field(None, gt=0)
    percentage: Optional[float] = Field(None, ge=0, le=100)
    status: Optional[ProductionStatus] = None
    notes: Optional[str] = None


class ProductionItemResponse(DocumentResponse):
    style_no: str
    buyer: str
    item: str
    total_qty: int
    price: float
    percentage: float
    status: ProductionStatus
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
