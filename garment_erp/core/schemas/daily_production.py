from typing import List, Optional
from pydantic import BaseModel, Field

from garment_erp.shared.date_utils import DATE_PATTERN


class DailyProductionReportResponse(BaseModel):
    id: str
    date: str
    style_no: str
    line_no: str
    target_qty: int
    production_qty: int
    unit_price: float
    total_amount: float
    net_amount: float
    buyer: Optional[str] = None
    item: Optional[str] = None
    percentage: Optional[float] = None
    efficiency: float = 0.0


class DailySummary(BaseModel):
    total_styles: int
    total_target_qty: int
    total_production_qty: int
    total_amount: float
    total_net_amount: float
    overall_efficiency: float


class DailyProductionSummaryResponse(BaseModel):
    date: str
    reports: List[DailyProductionReportResponse]
    summary: DailySummary


class TrendStyle(BaseModel):
    style_no: str
    line_no: str
    target: int
    production: int
    efficiency: float


class TrendDay(BaseModel):
    date: str
    total_target: int
    total_production: int
    total_amount: float
    total_net_amount: float
    styles: List[TrendStyle]


class ResyncRequest(BaseModel):
    date: str = Field(..., pattern=DATE_PATTERN)
    style_no: Optional[str] = None
    line_no: Optional[str] = None


class ResyncFailure(BaseModel):
    date: str
    style_no: str
    line_no: str
    error: str


class ResyncResponse(BaseModel):
    date: str
    keys_processed: int
    upserted: int
    removed: int
    failed: List[ResyncFailure] = []


class EmailReportRequest(BaseModel):
    date: str = Field(..., pattern=DATE_PATTERN)
    recipients: Optional[List[str]] = Field(None, description="Defaults to REPORT_RECIPIENTS")
