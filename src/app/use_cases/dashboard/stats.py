"""Dashboard Use Cases

Aggregate figures over an owner's invoices.
"""

from calendar import monthrange
from datetime import date
from typing import Callable, Optional, Tuple
from libs.result import Result, Return, Error
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.use_cases.invoices.mappers import to_invoice_summary
from src.domain.invoice import InvoiceStatus
from .dtos import ChartPointDTO, DashboardStatsDTO, IncomeChartDTO

RECENT_INVOICES = 5
CHART_MONTHS = 6


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    """First and last day of a calendar month"""
    return date(year, month, 1), date(year, month, monthrange(year, month)[1])


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """Move (year, month) by delta months"""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


class GetDashboardStats:
    """
    Use Case: Dashboard statistics

    - total_month / count_month: invoices issued this calendar month,
      excluding CANCELLED
    - total_pending: SENT + OVERDUE, any date
    - client_count
    - the five most recently created invoices
    """

    def __init__(
        self,
        client_repo: ClientRepository,
        invoice_repo: InvoiceRepository,
        today: Callable[[], date] = date.today,
    ):
        self.client_repo = client_repo
        self.invoice_repo = invoice_repo
        self.today = today

    async def execute(self, user_id: str) -> Result[DashboardStatsDTO]:
        try:
            now = self.today()
            month_start, month_end = month_bounds(now.year, now.month)
            billable = [s for s in InvoiceStatus if s != InvoiceStatus.CANCELLED]
            pending = [InvoiceStatus.SENT, InvoiceStatus.OVERDUE]

            total_month = await self.invoice_repo.sum_total(
                user_id, billable, issued_from=month_start, issued_to=month_end
            )
            count_month = await self.invoice_repo.count(
                user_id, billable, issued_from=month_start, issued_to=month_end
            )
            total_pending = await self.invoice_repo.sum_total(user_id, pending)
            client_count = await self.client_repo.count_by_user_id(user_id)

            recent = await self.invoice_repo.list_by_user_id(user_id, limit=RECENT_INVOICES)
            clients = await self.client_repo.list_by_user_id(user_id)
            names = {client.id: client.name for client in clients}

            return Return.ok(
                DashboardStatsDTO(
                    total_month=total_month,
                    count_month=count_month,
                    total_pending=total_pending,
                    client_count=client_count,
                    recent_invoices=[to_invoice_summary(inv, names.get(inv.client_id)) for inv in recent],
                )
            )

        except Exception as e:
            return Return.err(
                Error(code="DASHBOARD_FAILED", message="Failed to compute dashboard stats", reason=str(e))
            )


class GetIncomeChart:
    """
    Use Case: Paid income for the last six months (current month included),
    oldest first
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        today: Callable[[], date] = date.today,
        months: Optional[int] = None,
    ):
        self.invoice_repo = invoice_repo
        self.today = today
        self.months = months or CHART_MONTHS

    async def execute(self, user_id: str) -> Result[IncomeChartDTO]:
        try:
            now = self.today()
            points = []
            for back in range(self.months - 1, -1, -1):
                year, month = shift_month(now.year, now.month, -back)
                start, end = month_bounds(year, month)
                total = await self.invoice_repo.sum_total(
                    user_id, [InvoiceStatus.PAID], issued_from=start, issued_to=end
                )
                points.append(ChartPointDTO(name=start.strftime("%b"), total=total))

            return Return.ok(IncomeChartDTO(points=points))

        except Exception as e:
            return Return.err(
                Error(code="DASHBOARD_FAILED", message="Failed to compute income chart", reason=str(e))
            )
