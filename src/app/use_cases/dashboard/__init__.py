"""Dashboard use cases"""
from .stats import GetDashboardStats, GetIncomeChart
from .dtos import DashboardStatsDTO, ChartPointDTO, IncomeChartDTO

__all__ = [
    "GetDashboardStats",
    "GetIncomeChart",
    "DashboardStatsDTO",
    "ChartPointDTO",
    "IncomeChartDTO",
]
