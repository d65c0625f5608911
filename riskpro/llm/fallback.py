"""
Deterministic Fallback — AI features without the LLM.

Used when no API key is configured, the LLM fails, or its response fails
validation. Covers the dashboard analysis (each rule that fires adds one
insight and one action item), risk suggestions, mitigation plans and
register insights.
"""

from __future__ import annotations

from riskpro.core.severity import classify
from riskpro.llm.prompt_builder import category_statistics
from riskpro.models.insight_models import (
    ActionItem,
    InsightCreate,
    InsightType,
    KeyInsight,
    RiskAnalysis,
    RiskSuggestion,
)
from riskpro.models.risk_models import (
    TERMINAL_STATUSES,
    Risk,
    RiskCategory,
    RiskStatus,
    Severity,
)


def generate_fallback_analysis(risks: list[Risk]) -> RiskAnalysis:
    open_risks = [r for r in risks if r.status not in TERMINAL_STATUSES]
    key_insights: list[KeyInsight] = []
    action_items: list[ActionItem] = []

    severe = [r for r in open_risks if r.severity in (Severity.CRITICAL, Severity.HIGH)]
    if severe:
        key_insights.append(
            KeyInsight(
                id="high-severity-open",
                title="High Severity Risks Require Attention",
                description=(
                    f"{len(severe)} high/critical severity risk(s) require mitigation planning."
                ),
                type="warning",
                severity="critical" if any(r.severity == Severity.CRITICAL for r in severe) else "high",
            )
        )
        action_items.append(
            ActionItem(
                id="mitigate-high-severity",
                title="Develop Mitigation Plans for High Severity Risks",
                description=(
                    "Create or review mitigation strategies for high severity risks "
                    "to reduce potential impact."
                ),
                priority="high",
                type="mitigation",
                relatedRiskIds=[r.id for r in severe],
            )
        )

    unowned = [r for r in open_risks if r.owner_id is None]
    if unowned:
        key_insights.append(
            KeyInsight(
                id="unowned-risks",
                title="Risks Without an Owner",
                description=f"{len(unowned)} open risk(s) have no assigned owner.",
                type="warning",
                severity="medium",
            )
        )
        action_items.append(
            ActionItem(
                id="assign-owners",
                title="Assign Risk Owners",
                description="Assign an accountable owner to every open risk.",
                priority="important",
                type="assignment",
                relatedRiskIds=[r.id for r in unowned],
            )
        )

    unplanned = [
        r for r in open_risks
        if r.status == RiskStatus.NEEDS_MITIGATION and not (r.mitigation_plan or "").strip()
    ]
    if unplanned:
        action_items.append(
            ActionItem(
                id="missing-mitigation-plans",
                title="Write Missing Mitigation Plans",
                description=(
                    f"{len(unplanned)} risk(s) are marked 'Needs Mitigation' but have no plan."
                ),
                priority="high",
                type="mitigation",
                relatedRiskIds=[r.id for r in unplanned],
            )
        )

    categories = {r.category for r in risks}
    key_insights.append(
        KeyInsight(
            id="risk-distribution",
            title="Risk Distribution Analysis",
            description=(
                f"Your risk register contains {len(risks)} risk item(s) across "
                f"{len(categories)} categor{'y' if len(categories) == 1 else 'ies'}."
            ),
            type="info",
            severity="medium",
        )
    )
    action_items.append(
        ActionItem(
            id="regular-review",
            title="Regular Risk Register Review",
            description=(
                "Schedule a regular review session to ensure risk items are "
                "up-to-date and properly assessed."
            ),
            priority="medium",
            type="review",
        )
    )

    return RiskAnalysis(keyInsights=key_insights, actionItems=action_items, llm_used=False)


# ── Risk suggestions ──

# (keywords, title, description, category, probability, impact, mitigation plan)
SUGGESTION_TEMPLATES: list[tuple[tuple[str, ...], str, str, RiskCategory, int, int, str]] = [
    (
        ("migration", "migrate", "data", "database", "legacy"),
        "Data loss or corruption during migration",
        "Records may be lost, duplicated or corrupted while moving data between systems.",
        RiskCategory.TECHNICAL, 3, 5,
        "Run rehearsal migrations on production-like copies, reconcile record counts "
        "and keep a tested rollback backup.",
    ),
    (
        ("security", "payment", "personal", "customer data", "login", "auth"),
        "Security vulnerability exposes sensitive data",
        "Insufficient security testing may leave exploitable weaknesses in the delivered system.",
        RiskCategory.SECURITY, 3, 5,
        "Include threat modelling in design reviews and schedule an independent "
        "penetration test before go-live.",
    ),
    (
        ("budget", "cost", "funding", "price"),
        "Budget overrun",
        "Unplanned work or price changes may push spend beyond the approved budget.",
        RiskCategory.FINANCIAL, 3, 4,
        "Track spend against budget every sprint and hold a contingency reserve.",
    ),
    (
        ("vendor", "supplier", "third-party", "third party", "api", "integration"),
        "Third-party dependency delays delivery",
        "Late or unreliable deliveries from external providers may block dependent work.",
        RiskCategory.EXTERNAL, 3, 3,
        "Agree delivery milestones contractually, monitor them weekly and prepare "
        "fallback interfaces.",
    ),
    (
        ("regulation", "regulatory", "compliance", "gdpr", "hipaa", "legal"),
        "Regulatory non-compliance",
        "Changing or misunderstood regulations may require rework or block release.",
        RiskCategory.EXTERNAL, 2, 5,
        "Engage legal review early and track applicable requirements in the backlog.",
    ),
    (
        ("team", "staff", "stakeholder", "training", "adoption", "users"),
        "Low user adoption",
        "End users may resist the change and keep using old processes.",
        RiskCategory.ORGANIZATIONAL, 3, 3,
        "Involve users in acceptance testing, run training sessions and appoint "
        "change champions.",
    ),
]

GENERIC_SUGGESTIONS: list[tuple[str, str, RiskCategory, int, int, str]] = [
    (
        "Schedule slippage",
        "Underestimated effort or late dependencies may delay key milestones.",
        RiskCategory.OPERATIONAL, 3, 3,
        "Plan with buffers, review the critical path weekly and escalate slips early.",
    ),
    (
        "Unclear or changing requirements",
        "Scope changes late in delivery may cause rework and missed deadlines.",
        RiskCategory.ORGANIZATIONAL, 3, 3,
        "Baseline requirements with sign-off and route changes through a change board.",
    ),
    (
        "Key person dependency",
        "Critical knowledge held by one team member may be lost through absence or departure.",
        RiskCategory.OPERATIONAL, 2, 4,
        "Pair on critical work and keep runbooks and design decisions documented.",
    ),
]

MIN_SUGGESTIONS = 3
MAX_SUGGESTIONS = 5


def _suggestion(title, description, category, probability, impact, plan) -> RiskSuggestion:
    return RiskSuggestion(
        title=title,
        description=description,
        category=category,
        probability=probability,
        impact=impact,
        severity=classify(probability, impact),
        mitigation_plan=plan,
    )


def generate_fallback_risk_suggestions(
    description: str, industry: str | None = None
) -> list[RiskSuggestion]:
    """Keyword-matched risk templates, padded with generic ones to 3-5 items."""
    text = f"{description} {industry or ''}".lower()

    suggestions = [
        _suggestion(*template)
        for keywords, *template in SUGGESTION_TEMPLATES
        if any(keyword in text for keyword in keywords)
    ][:MAX_SUGGESTIONS]

    for generic in GENERIC_SUGGESTIONS:
        if len(suggestions) >= MIN_SUGGESTIONS:
            break
        suggestions.append(_suggestion(*generic))

    return suggestions


# ── Mitigation plans ──

MITIGATION_TIMELINES: dict[Severity, str] = {
    Severity.CRITICAL: "Start immediately; preventive measures in place within one week.",
    Severity.HIGH: "Start this sprint; preventive measures in place within two weeks.",
    Severity.MEDIUM: "Plan within the month and review progress at each status meeting.",
    Severity.LOW: "Address at the next quarterly risk review.",
    Severity.VERY_LOW: "Monitor; revisit if probability or impact increases.",
}


def generate_fallback_mitigation(
    title: str,
    description: str,
    category: RiskCategory | None = None,
    severity: Severity | None = None,
) -> str:
    """Structured mitigation plan template for one risk."""
    timeline = MITIGATION_TIMELINES.get(severity, MITIGATION_TIMELINES[Severity.MEDIUM])
    area = f"{category.value.lower()} " if category else ""

    return "\n".join(
        [
            f"Mitigation plan for: {title}",
            "",
            f"1. Preventive measures: identify the root causes behind \"{description}\" "
            f"and put {area}controls in place that lower its probability.",
            "2. Detective measures: define early-warning indicators and review them "
            "at every status meeting.",
            "3. Corrective measures: prepare a contingency plan that limits the impact "
            "if the risk occurs, including escalation paths.",
            "4. Responsibilities: the risk owner maintains this plan; the project "
            "manager tracks actions to closure.",
            f"5. Timeline: {timeline}",
        ]
    )


# ── Register insights ──


def generate_fallback_risk_insights(risks: list[Risk]) -> list[InsightCreate]:
    """Up to four statistics-driven insights; none for an empty register."""
    stats = category_statistics(risks)
    if not stats:
        return []

    insights: list[InsightCreate] = []

    busiest = max(stats, key=lambda s: s["count"])
    insights.append(
        InsightCreate(
            title=f"{busiest['category']} Risks Dominate the Register",
            description=(
                f"{busiest['count']} of {len(risks)} risks are {busiest['category']} risks. "
                "Consider a dedicated review of this area."
            ),
            type=InsightType.PATTERN,
            related_category=busiest["category"],
        )
    )

    severe = max(stats, key=lambda s: s["highSeverityCount"])
    if severe["highSeverityCount"] > 0:
        insights.append(
            InsightCreate(
                title=f"High Severity Concentration in {severe['category']}",
                description=(
                    f"{severe['highSeverityCount']} Critical/High risk(s) sit in the "
                    f"{severe['category']} category. Prioritise their mitigation plans."
                ),
                type=InsightType.WARNING,
                related_category=severe["category"],
            )
        )

    impactful = max(stats, key=lambda s: s["averageImpact"])
    insights.append(
        InsightCreate(
            title=f"Highest Average Impact: {impactful['category']}",
            description=(
                f"{impactful['category']} risks average an impact of "
                f"{impactful['averageImpact']} out of 5. Contingency plans should focus here."
            ),
            type=InsightType.SUGGESTION,
            related_category=impactful["category"],
        )
    )

    likely = max(stats, key=lambda s: s["averageProbability"])
    insights.append(
        InsightCreate(
            title=f"Most Likely Risks: {likely['category']}",
            description=(
                f"{likely['category']} risks average a probability of "
                f"{likely['averageProbability']} out of 5. Preventive controls would pay off most here."
            ),
            type=InsightType.TREND,
            related_category=likely["category"],
        )
    )

    return insights[:4]
