"""
Heatmap Builder — Dense 5×5 probability/impact grid of risk counts.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from riskpro.core.severity import SCALE_MAX, SCALE_MIN
from riskpro.models.risk_models import Risk
from riskpro.models.summary_models import HeatmapCell


def build_heatmap(risks: Iterable[Risk]) -> list[HeatmapCell]:
    """
    Count risks per (impact, probability) coordinate.

    Always returns all 25 cells, zero counts included. Rows run from the
    highest impact down; within a row probability ascends. Severity is not
    consulted, only the raw coordinates.
    """
    counts = Counter((r.impact, r.probability) for r in risks)

    return [
        HeatmapCell(
            impact=impact,
            probability=probability,
            count=counts.get((impact, probability), 0),
        )
        for impact in range(SCALE_MAX, SCALE_MIN - 1, -1)
        for probability in range(SCALE_MIN, SCALE_MAX + 1)
    ]
