"""
Tests for the HTTP API — register CRUD, dashboard, insights, auth and errors.
"""

from riskpro.api import dependencies as deps
from riskpro.auth.providers import AnonymousProvider, SessionTokenProvider
from riskpro.core.severity import classify
from riskpro.main import app

NEW_RISK = {
    "title": "Key supplier insolvency",
    "description": "Primary hardware supplier shows financial distress",
    "category": "External",
    "probability": 4,
    "impact": 5,
}


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["llm_configured"] is False


# ── Risks ──


def test_create_risk_derives_severity(client):
    response = client.post("/api/risks", json=NEW_RISK)
    assert response.status_code == 201
    risk = response.json()
    assert risk["severity"] == "Critical"
    assert risk["reference_id"].startswith("R-")
    assert risk["created_by"] == 1


def test_supplied_severity_is_ignored(client):
    response = client.post("/api/risks", json={**NEW_RISK, "probability": 1, "impact": 2, "severity": "Critical"})
    assert response.status_code == 201
    assert response.json()["severity"] == "Very Low"


def test_out_of_range_rating_is_400(client):
    response = client.post("/api/risks", json={**NEW_RISK, "probability": 6})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid request data"


def test_unknown_category_is_400(client):
    response = client.post("/api/risks", json={**NEW_RISK, "category": "Weather"})
    assert response.status_code == 400


def test_get_risk_detail_includes_creation_event(client):
    created = client.post("/api/risks", json={**NEW_RISK, "owner_id": 2, "project_id": 1}).json()
    response = client.get(f"/api/risks/{created['id']}")
    assert response.status_code == 200
    detail = response.json()
    assert detail["owner"]["name"] == "Sarah Johnson"
    assert detail["project"]["name"] == "Cloud Migration"
    assert detail["events"][0]["description"] == "Risk created with status 'Identified'"


def test_update_risk_reclassifies_and_records_status_change(client):
    created = client.post("/api/risks", json=NEW_RISK).json()
    response = client.put(
        f"/api/risks/{created['id']}",
        json={"probability": 1, "impact": 1, "status": "Mitigated"},
    )
    assert response.status_code == 200
    assert response.json()["severity"] == "Very Low"

    events = client.get(f"/api/risks/{created['id']}").json()["events"]
    assert events[0]["event_type"] == "Status Change"
    assert "to 'Mitigated'" in events[0]["description"]


def test_delete_risk(client):
    created = client.post("/api/risks", json=NEW_RISK).json()
    response = client.delete(f"/api/risks/{created['id']}")
    assert response.status_code == 200
    assert response.json() == {"message": "Risk successfully deleted"}
    assert client.get(f"/api/risks/{created['id']}").status_code == 404


def test_missing_risk_is_404(client):
    assert client.get("/api/risks/9999").status_code == 404
    assert client.put("/api/risks/9999", json={"title": "x"}).status_code == 404
    assert client.delete("/api/risks/9999").status_code == 404
    response = client.post("/api/risks/9999/events", json={"event_type": "Comment", "description": "hi"})
    assert response.status_code == 404


def test_list_risks_with_filters(client):
    all_risks = client.get("/api/risks").json()
    critical = client.get("/api/risks", params={"severity": "Critical"}).json()
    assert 0 < len(critical) <= len(all_risks)
    assert all(r["severity"] == "Critical" for r in critical)

    by_project = client.get("/api/risks", params={"project_id": 1}).json()
    assert all(r["project_id"] == 1 for r in by_project)


def test_add_event(client):
    response = client.post("/api/risks/1/events", json={"event_type": "Comment", "description": "Reviewed"})
    assert response.status_code == 201
    assert response.json()["risk_id"] == 1


# ── Projects ──


def test_project_crud(client):
    created = client.post("/api/projects", json={"name": "Data Lake"})
    assert created.status_code == 201
    project_id = created.json()["id"]

    patched = client.patch(f"/api/projects/{project_id}", json={"status": "On Hold"})
    assert patched.json()["status"] == "On Hold"

    deleted = client.delete(f"/api/projects/{project_id}")
    assert deleted.json() == {"message": "Project deleted successfully"}
    assert client.get(f"/api/projects/{project_id}").status_code == 404


def test_project_with_risks_cannot_be_deleted(client):
    response = client.delete("/api/projects/1")
    assert response.status_code == 400
    assert "associated risks" in response.json()["message"]


# ── Dashboard ──


def test_dashboard_summary_shape(client):
    response = client.get("/api/dashboard")
    assert response.status_code == 200
    summary = response.json()

    assert summary["totalRisks"] == len(client.get("/api/risks").json())
    assert len(summary["heatmapData"]) == 25
    assert sum(c["count"] for c in summary["heatmapData"]) == summary["totalRisks"]
    assert sum(r["count"] for r in summary["risksByCategory"]) == summary["totalRisks"]
    assert 0 <= summary["mitigationProgress"] <= 100
    assert len(summary["topRisks"]) <= 5
    assert len(summary["insights"]) <= 4
    assert not any(p["synthetic"] for p in summary["riskTrend"])

    severity_rows = {r["severity"]: r["count"] for r in summary["risksBySeverity"]}
    assert summary["criticalRisks"] == severity_rows.get("Critical", 0)
    assert summary["highRisks"] == severity_rows.get("High", 0)


def test_dashboard_reflects_new_risk(client):
    before = client.get("/api/dashboard").json()["criticalRisks"]
    client.post("/api/risks", json=NEW_RISK)
    after = client.get("/api/dashboard").json()["criticalRisks"]
    assert after == before + 1


# ── Insights ──


def test_dismiss_insight(client):
    insights = client.get("/api/insights").json()
    assert insights
    target = insights[0]["id"]

    response = client.post(f"/api/insights/{target}/dismiss")
    assert response.status_code == 200
    assert response.json()["is_dismissed"] is True
    assert target not in [i["id"] for i in client.get("/api/insights").json()]


def test_dismiss_missing_insight_is_404(client):
    assert client.post("/api/insights/9999/dismiss").status_code == 404


def test_ai_dashboard_insights_falls_back_without_llm(client):
    response = client.get("/api/ai/dashboard-insights")
    assert response.status_code == 200
    analysis = response.json()
    assert analysis["llm_used"] is False
    assert analysis["keyInsights"]
    assert analysis["actionItems"]


# ── Auth and audit ──


def test_me_returns_default_user(client):
    response = client.get("/api/auth/me")
    assert response.status_code == 200
    assert response.json()["username"] == "admin"
    assert "password_hash" not in response.json()


def test_session_login_and_token(client, seeded_store):
    app.dependency_overrides[deps.get_auth_provider] = lambda: SessionTokenProvider(
        seeded_store, secret="test-secret"
    )

    bad = client.post("/api/auth/login", json={"username": "admin", "password": "wrong"})
    assert bad.status_code == 401

    login = client.post("/api/auth/login", json={"username": "admin", "password": "admin123"})
    assert login.status_code == 200
    token = login.json()["token"]
    assert token

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.json()["username"] == "admin"

    assert client.get("/api/auth/me").status_code == 401
    assert client.post("/api/risks", json=NEW_RISK).status_code == 401


def test_audit_trail_records_changes(client):
    created = client.post("/api/risks", json=NEW_RISK).json()
    entries = client.get("/api/audit", params={"count": 5}).json()
    assert entries[-1]["action"] == "create"
    assert entries[-1]["entity"] == "risk"
    assert entries[-1]["entity_id"] == created["id"]


def test_audit_requires_admin(client, seeded_store):
    viewer = seeded_store.get_user_by_username("viewer")
    app.dependency_overrides[deps.get_auth_provider] = lambda: AnonymousProvider(
        seeded_store, viewer.id
    )
    assert client.get("/api/audit").status_code == 403


def test_anonymous_mode_on_empty_register_can_create(client):
    from riskpro.services.trend import HistoryTrendSource
    from riskpro.storage.memory_store import MemoryStore

    empty = MemoryStore()
    app.dependency_overrides[deps.get_store] = lambda: empty
    app.dependency_overrides[deps.get_auth_provider] = lambda: AnonymousProvider(empty, 1)
    app.dependency_overrides[deps.get_trend_source] = lambda: HistoryTrendSource(empty)

    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.json()["username"] == "system"

    response = client.post("/api/risks", json=NEW_RISK)
    assert response.status_code == 201
    assert response.json()["reference_id"] == "R-001"


# ── Users ──


def test_list_users_hides_password_hash(client, seeded_store):
    response = client.get("/api/users")
    assert response.status_code == 200
    users = response.json()
    assert len(users) == len(seeded_store.get_all_users())
    assert users[0]["username"] == "admin"
    assert all("password_hash" not in u for u in users)


# ── AI generation ──


def test_generate_risks_without_llm(client):
    response = client.post(
        "/api/ai/generate-risks",
        json={"description": "Migrate customer data to a new vendor API", "industry": "Retail"},
    )
    assert response.status_code == 200
    suggestions = response.json()
    assert 3 <= len(suggestions) <= 5
    for s in suggestions:
        assert s["severity"] == classify(s["probability"], s["impact"]).value
        assert s["status"] == "Identified"


def test_risk_suggestions_use_project_description(client):
    response = client.post(
        "/api/ai/risk-suggestions", json={"projectDescription": "Office relocation"}
    )
    assert response.status_code == 200
    assert len(response.json()) == 3

    assert client.post("/api/ai/risk-suggestions", json={"description": "x"}).status_code == 400
    assert client.post("/api/ai/generate-risks", json={"description": ""}).status_code == 400


def test_generate_mitigation_without_llm(client):
    response = client.post(
        "/api/ai/generate-mitigation",
        json={"risk": {"title": "Vendor delay", "description": "Parts arrive late", "severity": "High"}},
    )
    assert response.status_code == 200
    plan = response.json()
    assert plan["llm_used"] is False
    assert plan["mitigation"].startswith("Mitigation plan for: Vendor delay")

    missing_title = client.post(
        "/api/ai/generate-mitigation", json={"risk": {"description": "Parts arrive late"}}
    )
    assert missing_title.status_code == 400


def test_risk_insights_are_generated_not_stored(client):
    before = client.get("/api/insights").json()
    response = client.post("/api/ai/risk-insights")
    assert response.status_code == 200
    insights = response.json()
    assert 1 <= len(insights) <= 4
    assert {i["type"] for i in insights} <= {"Pattern", "Trend", "Warning", "Suggestion"}
    assert client.get("/api/insights").json() == before
