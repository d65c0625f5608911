"""
Risk Aggregator — Counts risks per category, status or severity.

Output is sparse (values with no risks are left out) and follows the fixed
enumeration order rather than count order, so chart legends stay stable.
"""

from __future__ import annotations

from collections import Counter
from enum import Enum
from typing import Iterable, Literal, Union

from pydantic import BaseModel

from riskpro.errors import InvalidArgument
from riskpro.models.risk_models import Risk, RiskCategory, RiskStatus, Severity
from riskpro.models.summary_models import CategoryCount, SeverityCount, StatusCount

Dimension = Literal["category", "status", "severity"]
DimensionCount = Union[CategoryCount, StatusCount, SeverityCount]

# dimension -> (domain in display order, output row model)
DIMENSIONS: dict[str, tuple[type[Enum], type[BaseModel]]] = {
    "category": (RiskCategory, CategoryCount),
    "status": (RiskStatus, StatusCount),
    "severity": (Severity, SeverityCount),
}


def aggregate_by(risks: Iterable[Risk], dimension: Dimension) -> list[DimensionCount]:
    """
    Count risks by one dimension in a single pass.

    Raises:
        InvalidArgument: for a dimension other than category/status/severity.
    """
    if dimension not in DIMENSIONS:
        raise InvalidArgument(
            f"Unknown dimension '{dimension}'. Expected one of {sorted(DIMENSIONS)}"
        )
    domain, row_model = DIMENSIONS[dimension]

    counts = Counter(getattr(r, dimension) for r in risks)

    return [
        row_model(**{dimension: value, "count": counts[value]})
        for value in domain
        if counts[value] > 0
    ]


def risks_by_category(risks: Iterable[Risk]) -> list[CategoryCount]:
    return aggregate_by(risks, "category")


def risks_by_status(risks: Iterable[Risk]) -> list[StatusCount]:
    return aggregate_by(risks, "status")


def risks_by_severity(risks: Iterable[Risk]) -> list[SeverityCount]:
    return aggregate_by(risks, "severity")
