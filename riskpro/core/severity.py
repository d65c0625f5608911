"""
Severity Classifier — Maps probability × impact to a severity band.

score = probability × impact, both on a 1-5 scale:
    score ≥ 20 → Critical
    score ≥ 12 → High
    score ≥ 6  → Medium
    score ≥ 3  → Low
    otherwise  → Very Low
"""

from __future__ import annotations

from riskpro.errors import InvalidArgument
from riskpro.models.risk_models import Severity

SCALE_MIN = 1
SCALE_MAX = 5

# Checked top-down; first threshold the score reaches wins
SEVERITY_THRESHOLDS: tuple[tuple[int, Severity], ...] = (
    (20, Severity.CRITICAL),
    (12, Severity.HIGH),
    (6, Severity.MEDIUM),
    (3, Severity.LOW),
)

SEVERITY_RANK: dict[Severity, int] = {
    Severity.CRITICAL: 4,
    Severity.HIGH: 3,
    Severity.MEDIUM: 2,
    Severity.LOW: 1,
    Severity.VERY_LOW: 0,
}


def _check_scale(name: str, value: object) -> int:
    # bool is an int subclass; True/False are not ratings
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{name} must be an integer, got {value!r}")
    if not SCALE_MIN <= value <= SCALE_MAX:
        raise InvalidArgument(
            f"{name} must be between {SCALE_MIN} and {SCALE_MAX}, got {value}"
        )
    return value


def risk_score(probability: int, impact: int) -> int:
    """Raw probability × impact score (1-25)."""
    return _check_scale("probability", probability) * _check_scale("impact", impact)


def classify(probability: int, impact: int) -> Severity:
    """
    Classify a (probability, impact) rating into a severity band.

    Raises:
        InvalidArgument: if either rating is not an integer in 1..5.
    """
    score = risk_score(probability, impact)
    for threshold, severity in SEVERITY_THRESHOLDS:
        if score >= threshold:
            return severity
    return Severity.VERY_LOW
