"""
Memory Store — In-process risk register storage.

Holds users, projects, risks, risk events, insights and severity snapshots
in dicts keyed by id. Severity is recomputed on every risk write, so a
stored risk always satisfies severity == classify(probability, impact).

Upgradeable to a relational backend by implementing the same methods.
"""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Callable

from riskpro.core.severity import classify
from riskpro.errors import InsightNotFound, ProjectInUse, ProjectNotFound, RiskNotFound
from riskpro.models.auth_models import User, UserRole
from riskpro.models.insight_models import Insight, InsightCreate
from riskpro.models.risk_models import (
    Project,
    ProjectCreate,
    ProjectUpdate,
    Risk,
    RiskCreate,
    RiskEvent,
    RiskEventType,
    RiskFilter,
    RiskUpdate,
    SeveritySnapshot,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_reference_id(risk_id: int) -> str:
    """R-001 style reference; ids are never reused, so neither are references."""
    return f"R-{risk_id:03d}"


class MemoryStore:
    """
    Thread-safe in-memory repository.

    Every read and write holds the store lock; reads hand out copies so
    callers work on their own snapshot.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or _utcnow
        self._lock = threading.Lock()

        self._users: dict[int, User] = {}
        self._projects: dict[int, Project] = {}
        self._risks: dict[int, Risk] = {}
        self._events: dict[int, RiskEvent] = {}
        self._insights: dict[int, Insight] = {}
        self._snapshots: list[SeveritySnapshot] = []

        self._next_ids = {
            "user": 1,
            "project": 1,
            "risk": 1,
            "event": 1,
            "insight": 1,
        }

    def _take_id(self, kind: str) -> int:
        value = self._next_ids[kind]
        self._next_ids[kind] = value + 1
        return value

    # ── Users ──

    def create_user(
        self,
        username: str,
        name: str,
        email: str,
        role: UserRole = UserRole.VIEWER,
        password_hash: str = "",
    ) -> User:
        with self._lock:
            user = User(
                id=self._take_id("user"),
                username=username,
                name=name,
                email=email,
                role=role,
                password_hash=password_hash,
                created_at=self._clock(),
            )
            self._users[user.id] = user
            return user.model_copy()

    def get_user(self, user_id: int) -> User | None:
        with self._lock:
            user = self._users.get(user_id)
            return user.model_copy() if user else None

    def get_user_by_username(self, username: str) -> User | None:
        with self._lock:
            for user in self._users.values():
                if user.username == username:
                    return user.model_copy()
            return None

    def get_all_users(self) -> list[User]:
        with self._lock:
            return [u.model_copy() for u in self._users.values()]

    # ── Projects ──

    def get_project(self, project_id: int) -> Project:
        with self._lock:
            project = self._projects.get(project_id)
            if project is None:
                raise ProjectNotFound(project_id)
            return project.model_copy()

    def get_all_projects(self) -> list[Project]:
        with self._lock:
            return [p.model_copy() for p in self._projects.values()]

    def create_project(self, data: ProjectCreate, created_by: int | None = None) -> Project:
        with self._lock:
            project = Project(
                id=self._take_id("project"),
                created_at=self._clock(),
                created_by=created_by,
                **data.model_dump(),
            )
            self._projects[project.id] = project
            return project.model_copy()

    def update_project(self, project_id: int, updates: ProjectUpdate) -> Project:
        with self._lock:
            existing = self._projects.get(project_id)
            if existing is None:
                raise ProjectNotFound(project_id)
            project = existing.model_copy(update=updates.model_dump(exclude_unset=True))
            self._projects[project_id] = project
            return project.model_copy()

    def delete_project(self, project_id: int) -> None:
        """Delete a project. Refuses while any risk still references it."""
        with self._lock:
            if project_id not in self._projects:
                raise ProjectNotFound(project_id)
            if any(r.project_id == project_id for r in self._risks.values()):
                raise ProjectInUse(
                    "Cannot delete project with associated risks. "
                    "Please remove or reassign all risks first."
                )
            del self._projects[project_id]

    # ── Risks ──

    def get_risk(self, risk_id: int) -> Risk:
        with self._lock:
            risk = self._risks.get(risk_id)
            if risk is None:
                raise RiskNotFound(risk_id)
            return risk.model_copy()

    def get_all_risks(self) -> list[Risk]:
        with self._lock:
            return [r.model_copy() for r in self._risks.values()]

    def get_filtered_risks(self, risk_filter: RiskFilter) -> list[Risk]:
        """Risks matching every field set on the filter."""
        criteria = risk_filter.model_dump(exclude_none=True)
        with self._lock:
            return [
                r.model_copy()
                for r in self._risks.values()
                if all(getattr(r, field) == value for field, value in criteria.items())
            ]

    def get_risks_by_project(self, project_id: int) -> list[Risk]:
        return self.get_filtered_risks(RiskFilter(project_id=project_id))

    def get_risks_by_owner(self, owner_id: int) -> list[Risk]:
        return self.get_filtered_risks(RiskFilter(owner_id=owner_id))

    def create_risk(self, data: RiskCreate, created_by: int | None = None) -> Risk:
        with self._lock:
            now = self._clock()
            risk_id = self._take_id("risk")
            risk = Risk(
                id=risk_id,
                reference_id=generate_reference_id(risk_id),
                severity=classify(data.probability, data.impact),
                created_by=created_by,
                created_at=now,
                updated_at=now,
                **data.model_dump(),
            )
            self._risks[risk.id] = risk
            self._record_snapshot(risk, now)
            return risk.model_copy()

    def update_risk(self, risk_id: int, updates: RiskUpdate) -> Risk:
        """Apply a partial update and re-derive severity."""
        with self._lock:
            existing = self._risks.get(risk_id)
            if existing is None:
                raise RiskNotFound(risk_id)

            changes = updates.model_dump(exclude_unset=True)
            # Explicit nulls cannot clear required fields
            for field in ("title", "category", "probability", "impact", "status"):
                if changes.get(field, ...) is None:
                    del changes[field]

            probability = changes.get("probability", existing.probability)
            impact = changes.get("impact", existing.impact)
            now = self._clock()

            risk = existing.model_copy(
                update={
                    **changes,
                    "severity": classify(probability, impact),
                    "updated_at": now,
                }
            )
            self._risks[risk_id] = risk
            if risk.severity != existing.severity:
                self._record_snapshot(risk, now)
            return risk.model_copy()

    def delete_risk(self, risk_id: int) -> None:
        with self._lock:
            if self._risks.pop(risk_id, None) is None:
                raise RiskNotFound(risk_id)
            self._snapshots.append(
                SeveritySnapshot(risk_id=risk_id, severity=None, recorded_at=self._clock())
            )

    def _record_snapshot(self, risk: Risk, at: datetime) -> None:
        self._snapshots.append(
            SeveritySnapshot(risk_id=risk.id, severity=risk.severity, recorded_at=at)
        )

    def get_severity_snapshots(self) -> list[SeveritySnapshot]:
        """Severity history in recording order."""
        with self._lock:
            return list(self._snapshots)

    # ── Risk events ──

    def get_risk_events(self, risk_id: int) -> list[RiskEvent]:
        """Events for a risk, newest first."""
        with self._lock:
            events = [e for e in self._events.values() if e.risk_id == risk_id]
        events.sort(key=lambda e: (e.created_at, e.id), reverse=True)
        return [e.model_copy() for e in events]

    def create_risk_event(
        self,
        risk_id: int,
        event_type: RiskEventType,
        description: str,
        created_by: int | None = None,
    ) -> RiskEvent:
        with self._lock:
            if risk_id not in self._risks:
                raise RiskNotFound(risk_id)
            event = RiskEvent(
                id=self._take_id("event"),
                risk_id=risk_id,
                event_type=event_type,
                description=description,
                created_at=self._clock(),
                created_by=created_by,
            )
            self._events[event.id] = event
            return event.model_copy()

    # ── Insights ──

    def get_active_insights(self) -> list[Insight]:
        """Non-dismissed insights, newest first."""
        with self._lock:
            active = [i for i in self._insights.values() if not i.is_dismissed]
        active.sort(key=lambda i: (i.created_at, i.id), reverse=True)
        return [i.model_copy() for i in active]

    def create_insight(self, data: InsightCreate) -> Insight:
        with self._lock:
            insight = Insight(
                id=self._take_id("insight"),
                created_at=self._clock(),
                **data.model_dump(),
            )
            self._insights[insight.id] = insight
            return insight.model_copy()

    def dismiss_insight(self, insight_id: int) -> Insight:
        with self._lock:
            existing = self._insights.get(insight_id)
            if existing is None:
                raise InsightNotFound(insight_id)
            insight = existing.model_copy(update={"is_dismissed": True})
            self._insights[insight_id] = insight
            return insight.model_copy()

    # ── Stats ──

    def stats(self) -> dict[str, int]:
        with self._lock:
            return {
                "users": len(self._users),
                "projects": len(self._projects),
                "risks": len(self._risks),
                "events": len(self._events),
                "insights": len(self._insights),
            }
