"""Unit tests for dashboard statistics and income chart"""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.dashboard import GetDashboardStats, GetIncomeChart
from src.app.use_cases.dashboard.stats import month_bounds, shift_month
from src.domain.invoice import InvoiceStatus


class TestCalendarHelpers:
    def test_month_bounds_leap_february(self):
        assert month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))

    def test_shift_month_across_year(self):
        assert shift_month(2024, 2, -5) == (2023, 9)
        assert shift_month(2023, 12, 1) == (2024, 1)


@pytest.mark.asyncio
class TestGetDashboardStats:
    async def test_stats(self, client_entity, stored_invoice):
        invoice_repo = MagicMock()
        invoice_repo.sum_total = AsyncMock(side_effect=[Decimal("135"), Decimal("500")])
        invoice_repo.count = AsyncMock(return_value=1)
        invoice_repo.list_by_user_id = AsyncMock(return_value=[stored_invoice])
        client_repo = MagicMock()
        client_repo.count_by_user_id = AsyncMock(return_value=1)
        client_repo.list_by_user_id = AsyncMock(return_value=[client_entity])

        use_case = GetDashboardStats(client_repo, invoice_repo, today=lambda: date(2024, 3, 15))
        result = await use_case.execute("user_1")

        assert result.is_ok()
        stats = result.value
        assert stats.total_month == Decimal("135")
        assert stats.total_pending == Decimal("500")
        assert stats.count_month == 1
        assert stats.client_count == 1
        assert stats.recent_invoices[0].client_name == "Acme Corp"

        month_call = invoice_repo.sum_total.call_args_list[0]
        assert InvoiceStatus.CANCELLED not in month_call.args[1]
        assert month_call.kwargs == {"issued_from": date(2024, 3, 1), "issued_to": date(2024, 3, 31)}
        pending_call = invoice_repo.sum_total.call_args_list[1]
        assert set(pending_call.args[1]) == {InvoiceStatus.SENT, InvoiceStatus.OVERDUE}
        invoice_repo.list_by_user_id.assert_called_once_with("user_1", limit=5)


@pytest.mark.asyncio
class TestGetIncomeChart:
    async def test_six_months_oldest_first(self):
        invoice_repo = MagicMock()
        invoice_repo.sum_total = AsyncMock(return_value=Decimal("0"))

        use_case = GetIncomeChart(invoice_repo, today=lambda: date(2024, 2, 10))
        result = await use_case.execute("user_1")

        assert result.is_ok()
        assert [point.name for point in result.value.points] == ["Sep", "Oct", "Nov", "Dec", "Jan", "Feb"]
        first = invoice_repo.sum_total.call_args_list[0]
        assert first.args[1] == [InvoiceStatus.PAID]
        assert first.kwargs == {"issued_from": date(2023, 9, 1), "issued_to": date(2023, 9, 30)}
