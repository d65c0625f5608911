"""
Insight Service — Stored insights passthrough and the AI-assisted features:
dashboard analysis, risk suggestions, mitigation plans, register insights.

Each AI feature follows the same pipeline:
1. Gather inputs (current risk snapshot or request fields)
2. If an LLM gateway is configured → build prompt and call it
3. Validate the response against its schema (and known risk ids)
4. On any failure → deterministic fallback
"""

from __future__ import annotations

import logging

from riskpro.llm.fallback import (
    generate_fallback_analysis,
    generate_fallback_mitigation,
    generate_fallback_risk_insights,
    generate_fallback_risk_suggestions,
)
from riskpro.llm.gateway import LLMGateway
from riskpro.llm.prompt_builder import (
    build_analysis_prompt,
    build_mitigation_prompt,
    build_risk_insights_prompt,
    build_risk_suggestion_prompt,
)
from riskpro.llm.response_validator import (
    validate_analysis,
    validate_risk_insights,
    validate_risk_suggestions,
)
from riskpro.models.insight_models import (
    Insight,
    InsightCreate,
    MitigationPlan,
    MitigationRiskInput,
    RiskAnalysis,
    RiskSuggestion,
)
from riskpro.storage.memory_store import MemoryStore

logger = logging.getLogger("riskpro.insights")


class InsightService:
    def __init__(self, store: MemoryStore, llm_gateway: LLMGateway | None = None) -> None:
        self.store = store
        self.llm_gateway = llm_gateway

    def get_active_insights(self) -> list[Insight]:
        return self.store.get_active_insights()

    async def analyze(self) -> RiskAnalysis:
        risks = self.store.get_all_risks()

        if self.llm_gateway is None:
            logger.info("No LLM configured — using fallback analysis")
            return generate_fallback_analysis(risks)

        llm_result = await self.llm_gateway.complete(build_analysis_prompt(risks))
        if not llm_result["success"]:
            logger.warning("LLM analysis failed — using fallback analysis")
            return generate_fallback_analysis(risks)

        validation = validate_analysis(llm_result["parsed"], {r.id for r in risks})
        if not validation.valid or validation.analysis is None:
            return generate_fallback_analysis(risks)

        logger.info(f"LLM analysis accepted ({llm_result['tokens_used']} tokens)")
        return validation.analysis.model_copy(update={"llm_used": True})

    async def suggest_risks(
        self, description: str, industry: str | None = None
    ) -> list[RiskSuggestion]:
        """3-5 proposed risks for a project description."""
        if self.llm_gateway is None:
            return generate_fallback_risk_suggestions(description, industry)

        llm_result = await self.llm_gateway.complete(
            build_risk_suggestion_prompt(description, industry)
        )
        if llm_result["success"]:
            validation = validate_risk_suggestions(llm_result["parsed"])
            if validation.valid:
                logger.info(f"LLM suggested {len(validation.items)} risks")
                return validation.items

        logger.warning("LLM risk suggestions unusable — using fallback suggestions")
        return generate_fallback_risk_suggestions(description, industry)

    async def suggest_mitigation(self, risk: MitigationRiskInput) -> MitigationPlan:
        if self.llm_gateway is not None:
            prompt = build_mitigation_prompt(
                risk.title,
                risk.description,
                category=risk.category.value if risk.category else None,
                severity=risk.severity.value if risk.severity else None,
            )
            llm_result = await self.llm_gateway.complete(prompt, json_mode=False)
            if llm_result["success"]:
                return MitigationPlan(mitigation=llm_result["content"].strip(), llm_used=True)
            logger.warning("LLM mitigation plan failed — using fallback plan")

        return MitigationPlan(
            mitigation=generate_fallback_mitigation(
                risk.title, risk.description, risk.category, risk.severity
            )
        )

    async def generate_risk_insights(self) -> list[InsightCreate]:
        """Insights over the current register. Not stored; empty register → []."""
        risks = self.store.get_all_risks()
        if not risks:
            return []

        if self.llm_gateway is not None:
            llm_result = await self.llm_gateway.complete(build_risk_insights_prompt(risks))
            if llm_result["success"]:
                validation = validate_risk_insights(llm_result["parsed"])
                if validation.valid:
                    return validation.items
            logger.warning("LLM risk insights unusable — using fallback insights")

        return generate_fallback_risk_insights(risks)
