"""
Top-Risks Selector — Critical and High risks surfaced on the dashboard.
"""

from __future__ import annotations

from typing import Iterable

from riskpro.core.severity import SEVERITY_RANK
from riskpro.errors import InvalidArgument
from riskpro.models.risk_models import Risk, Severity

TOP_SEVERITIES: frozenset[Severity] = frozenset({Severity.CRITICAL, Severity.HIGH})


def select_top_risks(risks: Iterable[Risk], limit: int = 5) -> list[Risk]:
    """
    Pick up to `limit` Critical/High risks.

    Critical comes before High; within a tier the most recently created risk
    comes first. Fewer qualifying risks than `limit` returns them all.
    """
    if limit < 0:
        raise InvalidArgument(f"limit must be non-negative, got {limit}")

    qualifying = [r for r in risks if r.severity in TOP_SEVERITIES]

    # Two stable sorts: newest first, then by tier
    qualifying.sort(key=lambda r: r.created_at, reverse=True)
    qualifying.sort(key=lambda r: SEVERITY_RANK[r.severity], reverse=True)

    return qualifying[:limit]
