"""Dashboard API Routes"""

from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.dependencies import get_current_user_id
from src.api.error import ClientError
from src.app.use_cases.dashboard import (
    DashboardStatsDTO,
    GetDashboardStats,
    GetIncomeChart,
    IncomeChartDTO,
)
from src.adapter.repositories import SqlAlchemyClientRepository, SqlAlchemyInvoiceRepository
from src.depends import get_session

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=DashboardStatsDTO)
async def get_stats(
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """
    Month-to-date billing, pending amount, client count and the five most
    recent invoices.
    """
    use_case = GetDashboardStats(
        SqlAlchemyClientRepository(session),
        SqlAlchemyInvoiceRepository(session),
    )
    result = await use_case.execute(user_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/chart", response_model=IncomeChartDTO)
async def get_income_chart(
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """Paid income per month for the last six months, oldest first."""
    result = await GetIncomeChart(SqlAlchemyInvoiceRepository(session)).execute(user_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
