"""
FastAPI Dependencies — Shared singletons injected via Depends().
"""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends
from fastapi.security import (
    HTTPAuthorizationCredentials,
    HTTPBasic,
    HTTPBasicCredentials,
    HTTPBearer,
)

from riskpro.audit.logger import AuditLogger
from riskpro.auth.providers import AuthProvider, build_auth_provider
from riskpro.config import settings
from riskpro.llm.gateway import LLMGateway
from riskpro.models.auth_models import Credential, User
from riskpro.services.dashboard_service import DashboardService
from riskpro.services.insight_service import InsightService
from riskpro.services.trend import TrendSource, build_trend_source
from riskpro.storage.memory_store import MemoryStore
from riskpro.storage.seed import seed_demo_data


@lru_cache
def get_store() -> MemoryStore:
    """Shared in-memory store singleton."""
    store = MemoryStore()
    if settings.seed_demo_data:
        seed_demo_data(store)
    return store


@lru_cache
def get_audit_logger() -> AuditLogger:
    """Shared audit logger singleton."""
    return AuditLogger()


@lru_cache
def get_llm_gateway() -> LLMGateway | None:
    """Shared LLM gateway singleton; None without an API key."""
    if not settings.groq_api_key:
        return None
    return LLMGateway()


@lru_cache
def get_auth_provider() -> AuthProvider:
    return build_auth_provider(settings.auth_provider, get_store())


@lru_cache
def get_trend_source() -> TrendSource:
    return build_trend_source(settings.trend_mode, get_store(), months=settings.trend_months)


def get_insight_service(
    store: MemoryStore = Depends(get_store),
    llm_gateway: LLMGateway | None = Depends(get_llm_gateway),
) -> InsightService:
    return InsightService(store, llm_gateway=llm_gateway)


def get_dashboard_service(
    store: MemoryStore = Depends(get_store),
    insights: InsightService = Depends(get_insight_service),
    trend_source: TrendSource = Depends(get_trend_source),
) -> DashboardService:
    return DashboardService(store, insights, trend_source)


_basic = HTTPBasic(auto_error=False)
_bearer = HTTPBearer(auto_error=False)


def get_credential(
    basic: HTTPBasicCredentials | None = Depends(_basic),
    bearer: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> Credential:
    """Credential from the Authorization header (Basic or Bearer), possibly empty."""
    if bearer is not None:
        return Credential(token=bearer.credentials)
    if basic is not None:
        return Credential(username=basic.username, password=basic.password)
    return Credential()


def get_current_user(
    credential: Credential = Depends(get_credential),
    provider: AuthProvider = Depends(get_auth_provider),
) -> User:
    """Resolve the acting user; AuthError becomes a 401 in the app handler."""
    return provider.identify_user(credential)
