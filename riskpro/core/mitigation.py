"""
Mitigation Progress — Share of risks that reached a terminal status.
"""

from __future__ import annotations

from typing import Iterable

from riskpro.models.risk_models import TERMINAL_STATUSES, Risk


def mitigation_progress(risks: Iterable[Risk]) -> int:
    """
    Percentage (0-100) of risks that are Mitigated or Closed.

    An empty collection is 0% rather than an error. Halves round up.
    """
    total = 0
    terminal = 0
    for r in risks:
        total += 1
        if r.status in TERMINAL_STATUSES:
            terminal += 1

    if total == 0:
        return 0

    # Integer half-up rounding of 100 * terminal / total
    return (200 * terminal + total) // (2 * total)
