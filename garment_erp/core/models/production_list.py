from datetime import datetime
from enum import Enum
from typing import Optional

from beanie import Document
from pydantic import Field
from pymongo import IndexModel, ASCENDING

from garment_erp.core.db import collections
from garment_erp.shared.timezone import get_local_now


class ProductionStatus(str, Enum):
    PENDING = "PENDING"
    RUNNING = "RUNNING"
    COMPLETE = "COMPLETE"
    CANCELLED = "CANCELLED"


class ProductionItem(Document):
    """
    A style (garment order) on the production list.
    Source of unit price and commission percentage for daily production value.
    """

    style_no: str = Field(..., description="Unique style / program code")
    buyer: str
    item: str = Field(..., description="Garment description")
    total_qty: int = Field(..., gt=0, description="Ordered quantity")
    price: float = Field(..., gt=0, description="Unit price (USD)")
    percentage: float = Field(default=0, ge=0, le=100, description="Share of value earned by the factory")
    status: ProductionStatus = ProductionStatus.PENDING
    notes: Optional[str] = None

    created_at: datetime = Field(default_factory=get_local_now)
    updated_at: datetime = Field(default_factory=get_local_now)

    class Settings:
        name = collections.PRODUCTION_LIST
        indexes = [
            IndexModel([("style_no", ASCENDING)], unique=True),
            [("status", ASCENDING)],
        ]

    class Config:
        json_schema_extra = {
            "example": {
                "style_no": "ST-2041",
                "buyer": "H&M",
                "item": "Men's Polo Shirt",
                "total_qty": 12000,
                "price": 2.35,
                "percentage": 18,
                "status": "RUNNING",
            }
        }
