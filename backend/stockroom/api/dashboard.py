# backend/stockroom/api/dashboard.py

from fastapi import APIRouter, Depends

from stockroom.api.deps import get_reports, get_settings
from stockroom.core.config import Settings
from stockroom.schemas.common import Envelope
from stockroom.schemas.reports import DashboardSummary
from stockroom.services.reports import ReportingEngine

router = APIRouter()


@router.get("/stats", response_model=Envelope[DashboardSummary])
def dashboard_stats(
    reports: ReportingEngine = Depends(get_reports),
    settings: Settings = Depends(get_settings),
):
    return {"data": reports.dashboard_summary(dead_stock_days=settings.DEAD_STOCK_DAYS)}
