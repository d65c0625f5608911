"""
Insight Data Models — Stored insights and the AI dashboard analysis schema.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

from riskpro.models.risk_models import RiskCategory, RiskStatus, Severity


class InsightType(str, Enum):
    PATTERN = "Pattern"
    TREND = "Trend"
    SUGGESTION = "Suggestion"
    WARNING = "Warning"


class Insight(BaseModel):
    """A stored insight shown on the dashboard until dismissed."""

    id: int
    title: str
    description: str
    type: InsightType
    related_category: RiskCategory | None = None
    created_at: datetime
    is_dismissed: bool = False


class InsightCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    type: InsightType
    related_category: RiskCategory | None = None


class KeyInsight(BaseModel):
    """One observation in an AI (or fallback) risk analysis."""

    id: str
    title: str
    description: str
    type: Literal["trend", "warning", "deadline", "info"]
    severity: Literal["critical", "high", "medium", "low"]


class ActionItem(BaseModel):
    """A recommended follow-up in an AI (or fallback) risk analysis."""

    id: str
    title: str
    description: str
    priority: Literal["critical", "high", "important", "medium", "low"]
    type: Literal["overdue", "approval", "mitigation", "review", "assignment", "escalation"]
    relatedRiskIds: list[int] = Field(default_factory=list)  # noqa: N815 — client field name


class RiskAnalysis(BaseModel):
    """Validated analysis payload — strict schema for LLM output."""

    keyInsights: list[KeyInsight] = Field(default_factory=list)  # noqa: N815
    actionItems: list[ActionItem] = Field(default_factory=list)  # noqa: N815
    llm_used: bool = False


# ── AI authoring helpers ──


class RiskSuggestionRequest(BaseModel):
    """Body for POST /api/ai/generate-risks."""

    description: str = Field(..., min_length=1, description="Project description")
    industry: str | None = None


class ProjectRiskSuggestionRequest(BaseModel):
    """Body for POST /api/ai/risk-suggestions (client field names)."""

    projectDescription: str = Field(..., min_length=1)  # noqa: N815 — client field name
    industry: str | None = None


class RiskSuggestion(BaseModel):
    """A proposed risk, ready to submit as a RiskCreate. Severity is derived."""

    title: str
    description: str | None = None
    category: RiskCategory
    probability: int = Field(..., ge=1, le=5)
    impact: int = Field(..., ge=1, le=5)
    severity: Severity
    status: RiskStatus = RiskStatus.IDENTIFIED
    mitigation_plan: str | None = None


class MitigationRiskInput(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    category: RiskCategory | None = None
    severity: Severity | None = None


class MitigationRequest(BaseModel):
    """Body for POST /api/ai/generate-mitigation."""

    risk: MitigationRiskInput


class MitigationPlan(BaseModel):
    mitigation: str
    llm_used: bool = False
