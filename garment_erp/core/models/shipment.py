from datetime import datetime
from typing import Optional

from beanie import Document
from pydantic import Field
from pymongo import ASCENDING, DESCENDING

from garment_erp.core.db import collections
from garment_erp.shared.timezone import get_local_now


class Shipment(Document):
    date: str = Field(..., description="YYYY-MM-DD")
    style_no: str
    quantity: int = Field(..., gt=0)
    destination: str
    awb_or_container: Optional[str] = None
    remarks: Optional[str] = None
    created_at: datetime = Field(default_factory=get_local_now)

    class Settings:
        name = collections.SHIPMENTS
        indexes = [
            [("style_no", ASCENDING)],
            [("date", DESCENDING)],
        ]
