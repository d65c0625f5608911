"""
Dashboard Summary Composer — Merges every derived view into one RiskSummary.

Pipeline over a single risk snapshot:
1. Aggregate by category, severity and status
2. Read critical/high headline counts off the severity aggregation
3. Compute mitigation progress
4. Select top risks
5. Build the dense heatmap
6. Attach the caller's trend series and insights as given
"""

from __future__ import annotations

from typing import Iterable

from riskpro.core.aggregator import risks_by_category, risks_by_severity, risks_by_status
from riskpro.core.heatmap import build_heatmap
from riskpro.core.mitigation import mitigation_progress
from riskpro.core.top_risks import select_top_risks
from riskpro.models.insight_models import Insight
from riskpro.models.risk_models import Risk, Severity
from riskpro.models.summary_models import RiskSummary, TrendPoint


def compose_summary(
    risks: Iterable[Risk],
    insights: Iterable[Insight] = (),
    trend: Iterable[TrendPoint] = (),
    top_limit: int = 5,
    insight_limit: int | None = 4,
) -> RiskSummary:
    """
    Compose the dashboard summary.

    Args:
        risks: Current risk collection; each risk's stored severity is trusted
        insights: Active insights, already ordered newest first
        trend: Time-bucketed severity counts from a trend source
        top_limit: Max entries in topRisks
        insight_limit: Max insights passed through (None keeps all)

    Returns:
        RiskSummary. Equal inputs always yield equal summaries.
    """
    snapshot = list(risks)

    by_severity = risks_by_severity(snapshot)
    severity_counts = {row.severity: row.count for row in by_severity}

    insight_list = list(insights)
    if insight_limit is not None:
        insight_list = insight_list[:insight_limit]

    return RiskSummary(
        totalRisks=len(snapshot),
        criticalRisks=severity_counts.get(Severity.CRITICAL, 0),
        highRisks=severity_counts.get(Severity.HIGH, 0),
        mitigationProgress=mitigation_progress(snapshot),
        risksByCategory=risks_by_category(snapshot),
        risksBySeverity=by_severity,
        risksByStatus=risks_by_status(snapshot),
        topRisks=select_top_risks(snapshot, limit=top_limit),
        riskTrend=list(trend),
        heatmapData=build_heatmap(snapshot),
        insights=insight_list,
    )
