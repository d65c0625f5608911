"""
Dashboard Route — GET /api/dashboard

Returns the composed RiskSummary consumed by the dashboard UI and exporters.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from riskpro.api.dependencies import get_dashboard_service
from riskpro.models.summary_models import RiskSummary
from riskpro.services.dashboard_service import DashboardService

router = APIRouter(tags=["dashboard"])


@router.get("/api/dashboard", response_model=RiskSummary)
async def dashboard(service: DashboardService = Depends(get_dashboard_service)):
    """Fresh summary over the current register; nothing is cached."""
    return service.get_summary()
