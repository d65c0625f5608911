"""
Trend Sources — Time-bucketed severity counts for the dashboard trend chart.

HistoryTrendSource replays the store's severity snapshots to reconstruct,
for each of the last N calendar months, how many live risks were Critical,
High and Medium at the end of that month.

SyntheticTrendSource produces placeholder points for demos and tests. Every
point it emits carries synthetic=True so it can never pass for real data.
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Callable

from riskpro.models.risk_models import Severity, SeveritySnapshot
from riskpro.models.summary_models import TrendPoint
from riskpro.storage.memory_store import MemoryStore

PLACEHOLDER_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun")


class TrendSource(ABC):
    @abstractmethod
    def get_trend(self) -> list[TrendPoint]:
        """Trend points, oldest bucket first."""


def _shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_buckets(now: datetime, months: int) -> list[tuple[str, datetime]]:
    """(label, exclusive end) for the `months` calendar months ending with `now`'s."""
    buckets = []
    for offset in range(months - 1, -1, -1):
        year, month = _shift_month(now.year, now.month, -offset)
        end_year, end_month = _shift_month(year, month, 1)
        end = datetime(end_year, end_month, 1, tzinfo=now.tzinfo)
        buckets.append((f"{year:04d}-{month:02d}", end))
    return buckets


def bucket_snapshots(
    snapshots: list[SeveritySnapshot],
    buckets: list[tuple[str, datetime]],
) -> list[TrendPoint]:
    """Replay snapshots in time order, emitting one point per bucket end."""
    ordered = sorted(snapshots, key=lambda s: s.recorded_at)
    state: dict[int, Severity] = {}
    points: list[TrendPoint] = []
    cursor = 0

    for label, end in buckets:
        while cursor < len(ordered) and ordered[cursor].recorded_at < end:
            snap = ordered[cursor]
            if snap.severity is None:
                state.pop(snap.risk_id, None)
            else:
                state[snap.risk_id] = snap.severity
            cursor += 1

        values = list(state.values())
        points.append(
            TrendPoint(
                period=label,
                critical=values.count(Severity.CRITICAL),
                high=values.count(Severity.HIGH),
                medium=values.count(Severity.MEDIUM),
            )
        )

    return points


class HistoryTrendSource(TrendSource):
    """Monthly buckets built from recorded severity history."""

    def __init__(
        self,
        store: MemoryStore,
        months: int = 6,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if months < 1:
            raise ValueError(f"months must be at least 1, got {months}")
        self.store = store
        self.months = months
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def get_trend(self) -> list[TrendPoint]:
        buckets = month_buckets(self._clock(), self.months)
        return bucket_snapshots(self.store.get_severity_snapshots(), buckets)


class SyntheticTrendSource(TrendSource):
    """
    Placeholder trend: critical 1-5, high 4-8, medium 6-10 per month.

    Pass a seeded `random.Random` for reproducible output.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        periods: tuple[str, ...] = PLACEHOLDER_MONTHS,
    ) -> None:
        self.rng = rng or random.Random()
        self.periods = periods

    def get_trend(self) -> list[TrendPoint]:
        return [
            TrendPoint(
                period=period,
                critical=self.rng.randint(1, 5),
                high=self.rng.randint(4, 8),
                medium=self.rng.randint(6, 10),
                synthetic=True,
            )
            for period in self.periods
        ]


def build_trend_source(
    mode: str,
    store: MemoryStore,
    months: int = 6,
) -> TrendSource:
    if mode == "history":
        return HistoryTrendSource(store, months=months)
    if mode == "synthetic":
        return SyntheticTrendSource(periods=PLACEHOLDER_MONTHS[:months])
    raise ValueError(f"Unknown trend mode '{mode}'. Expected 'history' or 'synthetic'")
