"""
Response Validator — Strict schema validation for LLM output.

Rejects responses that:
- Fail JSON parsing
- Do not match the expected schema (analysis, risk suggestions, insights)
- Reference risk ids that are not in the register

A response with any invalid item is rejected whole; callers fall back.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from riskpro.core.severity import classify
from riskpro.models.insight_models import InsightCreate, RiskAnalysis, RiskSuggestion
from riskpro.models.risk_models import RiskCreate

logger = logging.getLogger("riskpro.llm.validator")


class ValidationResult:
    """Result of response validation."""

    def __init__(self) -> None:
        self.valid = True
        self.errors: list[str] = []
        self.analysis: RiskAnalysis | None = None
        self.items: list = []

    def add_error(self, error: str) -> None:
        self.valid = False
        self.errors.append(error)


def validate_analysis(parsed: dict[str, Any] | None, valid_risk_ids: set[int]) -> ValidationResult:
    result = ValidationResult()

    if parsed is None:
        result.add_error("LLM returned non-JSON or empty response")
        return result

    try:
        analysis = RiskAnalysis(**parsed)
    except (ValidationError, TypeError) as e:
        result.add_error(f"Schema validation failed: {e}")
        return result

    result.analysis = analysis

    for item in analysis.actionItems:
        unknown = [rid for rid in item.relatedRiskIds if rid not in valid_risk_ids]
        if unknown:
            result.add_error(
                f"Action item '{item.id}' references unknown risk ids {unknown}"
            )

    if not analysis.keyInsights and not analysis.actionItems:
        result.add_error("LLM returned an empty analysis")

    if result.errors:
        logger.warning(
            f"LLM analysis validation failed with {len(result.errors)} errors: "
            f"{result.errors}"
        )

    return result


def _unwrap_list(parsed: Any, key: str) -> list | None:
    # JSON mode forces an object; accept {"<key>": [...]} or a bare list
    if isinstance(parsed, dict):
        parsed = parsed.get(key)
    return parsed if isinstance(parsed, list) else None


def validate_risk_suggestions(parsed: Any) -> ValidationResult:
    """
    Validate LLM risk suggestions. Each item must be a valid RiskCreate;
    severity is derived here, whatever the model claimed.
    """
    result = ValidationResult()

    items = _unwrap_list(parsed, "risks")
    if not items:
        result.add_error("LLM returned no list of risks")
        return result

    for index, item in enumerate(items):
        if not isinstance(item, dict):
            result.add_error(f"Risk #{index} is not an object")
            continue
        try:
            risk = RiskCreate(
                title=item.get("title"),
                description=item.get("description"),
                category=item.get("category"),
                probability=item.get("probability"),
                impact=item.get("impact"),
                mitigation_plan=item.get("mitigation_plan"),
            )
        except ValidationError as e:
            result.add_error(f"Risk #{index} failed validation: {e.error_count()} errors")
            continue

        result.items.append(
            RiskSuggestion(
                title=risk.title,
                description=risk.description,
                category=risk.category,
                probability=risk.probability,
                impact=risk.impact,
                severity=classify(risk.probability, risk.impact),
                mitigation_plan=risk.mitigation_plan,
            )
        )

    if result.errors:
        logger.warning(f"Risk suggestion validation failed: {result.errors}")
    return result


def validate_risk_insights(parsed: Any) -> ValidationResult:
    """Validate LLM register insights into InsightCreate records."""
    result = ValidationResult()

    items = _unwrap_list(parsed, "insights")
    if not items:
        result.add_error("LLM returned no list of insights")
        return result

    for index, item in enumerate(items):
        try:
            result.items.append(InsightCreate.model_validate(item))
        except ValidationError as e:
            result.add_error(f"Insight #{index} failed validation: {e.error_count()} errors")

    if result.errors:
        logger.warning(f"Risk insight validation failed: {result.errors}")
    return result
