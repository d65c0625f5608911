"""
Dashboard Service — Loads collaborators' data and composes the RiskSummary.
"""

from __future__ import annotations

import logging

from riskpro.config import settings
from riskpro.core.summary import compose_summary
from riskpro.models.summary_models import RiskSummary
from riskpro.services.insight_service import InsightService
from riskpro.services.trend import TrendSource
from riskpro.storage.memory_store import MemoryStore

logger = logging.getLogger("riskpro.dashboard")


class DashboardService:
    def __init__(
        self,
        store: MemoryStore,
        insights: InsightService,
        trend_source: TrendSource,
        top_limit: int | None = None,
        insight_limit: int | None = None,
    ) -> None:
        self.store = store
        self.insights = insights
        self.trend_source = trend_source
        self.top_limit = top_limit if top_limit is not None else settings.top_risks_limit
        self.insight_limit = (
            insight_limit if insight_limit is not None else settings.dashboard_insight_limit
        )

    def get_summary(self) -> RiskSummary:
        risks = self.store.get_all_risks()
        trend = self.trend_source.get_trend()
        if any(point.synthetic for point in trend):
            logger.info("Dashboard trend is synthetic placeholder data")

        return compose_summary(
            risks,
            insights=self.insights.get_active_insights(),
            trend=trend,
            top_limit=self.top_limit,
            insight_limit=self.insight_limit,
        )
