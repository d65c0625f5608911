"""
Insight Routes

    GET  /api/insights                 → active insights, newest first
    POST /api/insights/{id}/dismiss    → hide an insight from the dashboard
    GET  /api/ai/dashboard-insights    → LLM analysis, deterministic fallback
    POST /api/ai/generate-risks        → 3-5 suggested risks for a description
    POST /api/ai/risk-suggestions      → same, client field names
    POST /api/ai/generate-mitigation   → mitigation plan for one risk
    POST /api/ai/risk-insights         → register insights (not stored)
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from riskpro.api.dependencies import (
    get_audit_logger,
    get_current_user,
    get_insight_service,
    get_store,
)
from riskpro.audit.logger import AuditLogger
from riskpro.models.audit_models import AuditEntry
from riskpro.models.auth_models import User
from riskpro.models.insight_models import (
    Insight,
    InsightCreate,
    MitigationPlan,
    MitigationRequest,
    ProjectRiskSuggestionRequest,
    RiskAnalysis,
    RiskSuggestion,
    RiskSuggestionRequest,
)
from riskpro.services.insight_service import InsightService
from riskpro.storage.memory_store import MemoryStore

logger = logging.getLogger("riskpro.api.insights")

router = APIRouter(tags=["insights"])


@router.get("/api/insights", response_model=list[Insight])
async def list_insights(service: InsightService = Depends(get_insight_service)):
    return service.get_active_insights()


@router.post("/api/insights/{insight_id}/dismiss", response_model=Insight)
async def dismiss_insight(
    insight_id: int,
    store: MemoryStore = Depends(get_store),
    user: User = Depends(get_current_user),
    audit: AuditLogger = Depends(get_audit_logger),
):
    insight = store.dismiss_insight(insight_id)
    audit.log(AuditEntry(action="dismiss", entity="insight", entity_id=insight_id, user_id=user.id))
    return insight


@router.get("/api/ai/dashboard-insights", response_model=RiskAnalysis)
async def dashboard_insights(service: InsightService = Depends(get_insight_service)):
    """AI analysis of the register. Never fails the request on LLM errors."""
    return await service.analyze()


@router.post("/api/ai/generate-risks", response_model=list[RiskSuggestion])
async def generate_risks(
    request: RiskSuggestionRequest,
    service: InsightService = Depends(get_insight_service),
):
    return await service.suggest_risks(request.description, request.industry)


@router.post("/api/ai/risk-suggestions", response_model=list[RiskSuggestion])
async def risk_suggestions(
    request: ProjectRiskSuggestionRequest,
    service: InsightService = Depends(get_insight_service),
):
    return await service.suggest_risks(request.projectDescription, request.industry)


@router.post("/api/ai/generate-mitigation", response_model=MitigationPlan)
async def generate_mitigation(
    request: MitigationRequest,
    service: InsightService = Depends(get_insight_service),
):
    return await service.suggest_mitigation(request.risk)


@router.post("/api/ai/risk-insights", response_model=list[InsightCreate])
async def risk_insights(service: InsightService = Depends(get_insight_service)):
    return await service.generate_risk_insights()
