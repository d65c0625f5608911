"""
Dashboard Summary Models — Aggregate structures returned per dashboard request.

Field names on RiskSummary are the camelCase keys the dashboard and export
clients read verbatim.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from riskpro.models.insight_models import Insight
from riskpro.models.risk_models import Risk, RiskCategory, RiskStatus, Severity


class HeatmapCell(BaseModel):
    impact: int = Field(..., ge=1, le=5)
    probability: int = Field(..., ge=1, le=5)
    count: int = Field(default=0, ge=0)


class CategoryCount(BaseModel):
    category: RiskCategory
    count: int = Field(..., gt=0)


class SeverityCount(BaseModel):
    severity: Severity
    count: int = Field(..., gt=0)


class StatusCount(BaseModel):
    status: RiskStatus
    count: int = Field(..., gt=0)


class TrendPoint(BaseModel):
    """Severity counts for one time bucket."""

    period: str = Field(..., description="Bucket label, e.g. '2026-03' or 'Mar'")
    critical: int = Field(default=0, ge=0)
    high: int = Field(default=0, ge=0)
    medium: int = Field(default=0, ge=0)
    synthetic: bool = Field(
        default=False, description="True when the point is placeholder data"
    )


class RiskSummary(BaseModel):
    """Composed dashboard aggregate. Never persisted."""

    totalRisks: int = Field(default=0, ge=0)  # noqa: N815 — client field names
    criticalRisks: int = Field(default=0, ge=0)  # noqa: N815
    highRisks: int = Field(default=0, ge=0)  # noqa: N815
    mitigationProgress: int = Field(default=0, ge=0, le=100)  # noqa: N815
    risksByCategory: list[CategoryCount] = Field(default_factory=list)  # noqa: N815
    risksBySeverity: list[SeverityCount] = Field(default_factory=list)  # noqa: N815
    risksByStatus: list[StatusCount] = Field(default_factory=list)  # noqa: N815
    topRisks: list[Risk] = Field(default_factory=list)  # noqa: N815
    riskTrend: list[TrendPoint] = Field(default_factory=list)  # noqa: N815
    heatmapData: list[HeatmapCell] = Field(default_factory=list)  # noqa: N815
    insights: list[Insight] = Field(default_factory=list)
