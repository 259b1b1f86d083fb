"""Data Transfer Objects for Dashboard Use Cases"""

from decimal import Decimal
from typing import List
from pydantic import BaseModel, Field

from src.app.use_cases.invoices.dtos import InvoiceSummaryDTO


class DashboardStatsDTO(BaseModel):
    """Headline figures for the owner's dashboard"""

    total_month: Decimal = Field(..., description="Sum of non-cancelled invoices issued this month")
    count_month: int = Field(..., description="Number of non-cancelled invoices issued this month")
    total_pending: Decimal = Field(..., description="Sum of SENT and OVERDUE invoices")
    client_count: int
    recent_invoices: List[InvoiceSummaryDTO]


class ChartPointDTO(BaseModel):
    name: str = Field(..., description="Short month name, e.g. 'Mar'")
    total: Decimal = Field(..., description="Paid total for the month")


class IncomeChartDTO(BaseModel):
    points: List[ChartPointDTO]
