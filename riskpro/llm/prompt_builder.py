"""
Prompt Builder — Structured prompt for dashboard risk analysis.

The LLM receives per-category statistics and a compact list of open
Critical/High risks, never free-text fields it could echo back wholesale.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone

from riskpro.models.risk_models import TERMINAL_STATUSES, Risk, RiskCategory, Severity


SYSTEM_PROMPT = """\
You are an expert risk analyst reviewing a project risk register.

You receive:
1. Risk statistics per category (count, average probability/impact, high-severity count)
2. The open Critical and High risks (id, title, category, severity, status, owner)

Your task:
- Produce 2-4 data-driven key insights
- Produce 1-4 concrete action items for project managers

STRICT RULES:
- ONLY reference risk ids present in the input
- Output STRICT JSON matching this schema:

{
  "keyInsights": [
    {
      "id": "short unique string",
      "title": "...",
      "description": "...",
      "type": "trend" | "warning" | "deadline" | "info",
      "severity": "critical" | "high" | "medium" | "low"
    }
  ],
  "actionItems": [
    {
      "id": "short unique string",
      "title": "...",
      "description": "...",
      "priority": "critical" | "high" | "important" | "medium" | "low",
      "type": "overdue" | "approval" | "mitigation" | "review" | "assignment" | "escalation",
      "relatedRiskIds": [risk ids from the input]
    }
  ]
}
"""


def category_statistics(risks: list[Risk]) -> list[dict]:
    """Per-category averages for categories that have risks."""
    stats = []
    for category in RiskCategory:
        members = [r for r in risks if r.category == category]
        if not members:
            continue
        stats.append(
            {
                "category": category.value,
                "count": len(members),
                "averageProbability": round(sum(r.probability for r in members) / len(members), 2),
                "averageImpact": round(sum(r.impact for r in members) / len(members), 2),
                "highSeverityCount": sum(
                    1 for r in members if r.severity in (Severity.CRITICAL, Severity.HIGH)
                ),
            }
        )
    return stats


def build_analysis_prompt(risks: list[Risk], now: datetime | None = None) -> str:
    open_severe = [
        {
            "id": r.id,
            "title": r.title,
            "category": r.category.value,
            "severity": r.severity.value,
            "status": r.status.value,
            "owner_id": r.owner_id,
        }
        for r in risks
        if r.severity in (Severity.CRITICAL, Severity.HIGH) and r.status not in TERMINAL_STATUSES
    ]
    current = (now or datetime.now(timezone.utc)).isoformat()

    return (
        f"{SYSTEM_PROMPT}\n"
        f"Current date: {current}\n\n"
        f"Risk statistics by category:\n{json.dumps(category_statistics(risks), indent=2)}\n\n"
        f"Open Critical/High risks:\n{json.dumps(open_severe, indent=2)}\n"
    )


_CATEGORY_NAMES = ", ".join(c.value for c in RiskCategory)


def build_risk_suggestion_prompt(description: str, industry: str | None = None) -> str:
    """Prompt asking for 3-5 project risks as {"risks": [...]}."""
    industry_line = f"Industry: {industry}\n" if industry else ""
    return (
        "You are an expert risk manager. Based on the following project description, "
        "identify 3-5 potential risks.\n\n"
        f"Project Description: {description}\n"
        f"{industry_line}\n"
        "For each risk provide a concise title, a detailed description, the most "
        f"appropriate category ({_CATEGORY_NAMES}), a probability rating and an impact "
        "rating (integers 1-5, 1 very low, 5 very high) and an actionable mitigation plan.\n\n"
        "Output STRICT JSON:\n"
        '{"risks": [{"title": "...", "description": "...", "category": "...", '
        '"probability": 1, "impact": 1, "mitigation_plan": "..."}]}\n\n'
        "Do not include a severity; it is computed from probability and impact.\n"
    )


def build_mitigation_prompt(
    title: str,
    description: str,
    category: str | None = None,
    severity: str | None = None,
) -> str:
    """Plain-text prompt for a mitigation plan for one risk."""
    return (
        "You are an expert risk manager. Suggest a comprehensive mitigation plan "
        "for the following risk.\n\n"
        f"Risk Title: {title}\n"
        f"Risk Description: {description}\n"
        f"Risk Category: {category or 'Unknown'}\n"
        f"Risk Severity: {severity or 'Unknown'}\n\n"
        "Cover preventive measures, detective measures, corrective measures, "
        "specific responsibilities and timeline considerations.\n"
        "Answer in plain text containing only the mitigation plan.\n"
    )


def build_risk_insights_prompt(risks: list[Risk]) -> str:
    """Prompt asking for 3-4 register insights as {"insights": [...]}."""
    return (
        "You are an expert risk analyst. Based on the following risk data, generate "
        "3-4 key insights that would be valuable for project managers.\n\n"
        f"Risk Summary by Category:\n{json.dumps(category_statistics(risks), indent=2)}\n\n"
        "For each insight provide a concise title, a description with specific "
        "observations and recommendations, the insight type (Pattern, Trend, "
        "Suggestion or Warning) and the related risk category (one of the "
        "categories in the data).\n\n"
        "Output STRICT JSON:\n"
        '{"insights": [{"title": "...", "description": "...", "type": "Pattern", '
        '"related_category": "..."}]}\n'
    )
