from typing import List
from pydantic import BaseModel


class Period(BaseModel):
    month: str
    start_date: str
    end_date: str


class ExpenseBreakdown(BaseModel):
    monthly_expenses: float
    daily_equivalent_monthly_expenses: float
    daily_cash_expenses: float
    daily_salary: float


class ProfitLossSummary(BaseModel):
    total_earnings: float
    total_expenses: float
    net_profit: float
    profit_margin: float
    breakdown: ExpenseBreakdown


class DailyBreakdownRow(BaseModel):
    date: str
    earnings: float
    monthly_expenses: float
    daily_cash_expenses: float
    daily_salary: float
    net_profit: float
    production_count: int
    cash_expense_count: int
    salary_count: int


class LineBreakdownRow(BaseModel):
    section_id: str
    section_name: str
    earnings: float
    monthly_expenses: float
    net_profit: float
    production_count: int


class ProfitLossResponse(BaseModel):
    period: Period
    summary: ProfitLossSummary
    daily_breakdown: List[DailyBreakdownRow]
    line_breakdown: List[LineBreakdownRow]
    top_performing_lines: List[LineBreakdownRow]
    worst_performing_lines: List[LineBreakdownRow]
