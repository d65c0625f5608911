"""
Test fixtures shared across all RiskPro tests.
"""

import os
import tempfile

# Settings are read at import time; pin test-friendly values first
os.environ["RISKPRO_BCRYPT_ROUNDS"] = "4"
os.environ["RISKPRO_GROQ_API_KEY"] = ""
os.environ["RISKPRO_AUDIT_LOG_PATH"] = os.path.join(
    tempfile.gettempdir(), "riskpro-test-audit.jsonl"
)

from datetime import datetime, timedelta, timezone

import pytest

from riskpro.core.severity import classify
from riskpro.models.risk_models import Risk, RiskCategory, RiskStatus

BASE_TIME = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Deterministic clock; each call advances by `step`."""

    def __init__(self, start: datetime = BASE_TIME, step: timedelta = timedelta(minutes=1)):
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current

    def set(self, moment: datetime) -> None:
        self.now = moment


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def base_time():
    return BASE_TIME


@pytest.fixture
def make_risk():
    """Factory for stored-shape risks with a derived severity."""
    counter = {"id": 0}

    def _make(
        probability: int = 3,
        impact: int = 3,
        status: RiskStatus = RiskStatus.IDENTIFIED,
        category: RiskCategory = RiskCategory.TECHNICAL,
        created_at: datetime | None = None,
        **extra,
    ) -> Risk:
        counter["id"] += 1
        rid = counter["id"]
        created = created_at or BASE_TIME + timedelta(minutes=rid)
        return Risk(
            id=rid,
            reference_id=f"R-{rid:03d}",
            title=extra.pop("title", f"Risk {rid}"),
            category=category,
            probability=probability,
            impact=impact,
            severity=classify(probability, impact),
            status=status,
            created_at=created,
            updated_at=created,
            **extra,
        )

    return _make


@pytest.fixture
def scenario_risks(make_risk):
    """One open critical risk and one closed very-low risk."""
    return [
        make_risk(probability=5, impact=5, status=RiskStatus.IDENTIFIED),
        make_risk(probability=1, impact=1, status=RiskStatus.CLOSED),
    ]


@pytest.fixture
def seeded_store():
    from riskpro.storage.memory_store import MemoryStore
    from riskpro.storage.seed import seed_demo_data

    store = MemoryStore()
    seed_demo_data(store)
    return store


@pytest.fixture
def client(seeded_store, tmp_path):
    """TestClient over a fresh seeded store with anonymous auth and no LLM."""
    from fastapi.testclient import TestClient

    from riskpro.api import dependencies as deps
    from riskpro.audit.logger import AuditLogger
    from riskpro.auth.providers import AnonymousProvider
    from riskpro.main import app
    from riskpro.services.trend import HistoryTrendSource

    audit = AuditLogger(str(tmp_path / "audit.jsonl"))
    app.dependency_overrides[deps.get_store] = lambda: seeded_store
    app.dependency_overrides[deps.get_audit_logger] = lambda: audit
    app.dependency_overrides[deps.get_llm_gateway] = lambda: None
    app.dependency_overrides[deps.get_auth_provider] = lambda: AnonymousProvider(seeded_store, 1)
    app.dependency_overrides[deps.get_trend_source] = lambda: HistoryTrendSource(seeded_store)

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
