"""
Tests for the Top-Risks Selector — filter, tier ordering, recency, limit.
"""

from datetime import timedelta

import pytest

from riskpro.core.top_risks import select_top_risks
from riskpro.errors import InvalidArgument
from riskpro.models.risk_models import Severity


def test_only_critical_and_high(make_risk):
    risks = [make_risk(5, 5), make_risk(3, 4), make_risk(2, 3), make_risk(1, 1)]
    top = select_top_risks(risks)
    assert {r.severity for r in top} <= {Severity.CRITICAL, Severity.HIGH}
    assert len(top) == 2


def test_critical_before_high_even_if_older(make_risk, base_time):
    old_critical = make_risk(5, 5, created_at=base_time)
    new_high = make_risk(3, 4, created_at=base_time + timedelta(days=30))
    top = select_top_risks([new_high, old_critical])
    assert [r.id for r in top] == [old_critical.id, new_high.id]


def test_newest_first_within_tier(make_risk, base_time):
    a = make_risk(3, 4, created_at=base_time)
    b = make_risk(4, 4, created_at=base_time + timedelta(hours=2))
    c = make_risk(4, 3, created_at=base_time + timedelta(hours=1))
    top = select_top_risks([a, b, c])
    assert [r.id for r in top] == [b.id, c.id, a.id]


def test_limit_truncates(make_risk):
    risks = [make_risk(5, 5) for _ in range(8)]
    assert len(select_top_risks(risks)) == 5
    assert len(select_top_risks(risks, limit=3)) == 3
    assert select_top_risks(risks, limit=0) == []


def test_fewer_than_limit_returns_all(make_risk):
    risks = [make_risk(5, 4), make_risk(1, 2)]
    assert len(select_top_risks(risks, limit=5)) == 1


def test_extra_low_risk_does_not_change_output(make_risk):
    risks = [make_risk(5, 5), make_risk(3, 4), make_risk(4, 4)]
    with_low = risks + [make_risk(1, 3)]
    assert select_top_risks(risks) == select_top_risks(with_low)


def test_negative_limit_rejected(make_risk):
    with pytest.raises(InvalidArgument):
        select_top_risks([make_risk(5, 5)], limit=-1)


def test_does_not_mutate_input(make_risk):
    risks = [make_risk(3, 4), make_risk(5, 5)]
    snapshot = list(risks)
    select_top_risks(risks)
    assert risks == snapshot
