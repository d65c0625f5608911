"""
Risk Routes — Register CRUD and risk events.

    GET    /api/risks               → list, optional equality filters
    GET    /api/risks/{id}          → risk with owner, project and events
    POST   /api/risks               → create; severity is derived, never accepted
    PUT    /api/risks/{id}          → partial update; severity re-derived
    DELETE /api/risks/{id}          → delete
    POST   /api/risks/{id}/events   → append an event

Missing ids raise RiskNotFound, which the app maps to 404.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from riskpro.api.dependencies import get_audit_logger, get_current_user, get_store
from riskpro.audit.logger import AuditLogger
from riskpro.errors import ProjectNotFound
from riskpro.models.audit_models import AuditEntry
from riskpro.models.auth_models import User
from riskpro.models.risk_models import (
    OwnerRef,
    ProjectRef,
    Risk,
    RiskCategory,
    RiskCreate,
    RiskDetail,
    RiskEvent,
    RiskEventCreate,
    RiskEventType,
    RiskFilter,
    RiskStatus,
    RiskUpdate,
    RiskView,
    Severity,
)
from riskpro.storage.memory_store import MemoryStore

logger = logging.getLogger("riskpro.api.risks")

router = APIRouter(prefix="/api/risks", tags=["risks"])


def _to_view(store: MemoryStore, risk: Risk) -> RiskView:
    owner = store.get_user(risk.owner_id) if risk.owner_id is not None else None
    project = None
    if risk.project_id is not None:
        try:
            project = store.get_project(risk.project_id)
        except ProjectNotFound:
            project = None

    return RiskView(
        **risk.model_dump(),
        owner=OwnerRef(id=owner.id, name=owner.name, role=owner.role.value) if owner else None,
        project=ProjectRef(id=project.id, name=project.name) if project else None,
    )


@router.get("", response_model=list[RiskView])
async def list_risks(
    project_id: int | None = None,
    owner_id: int | None = None,
    category: RiskCategory | None = None,
    severity: Severity | None = None,
    status: RiskStatus | None = None,
    store: MemoryStore = Depends(get_store),
):
    risk_filter = RiskFilter(
        project_id=project_id,
        owner_id=owner_id,
        category=category,
        severity=severity,
        status=status,
    )
    if risk_filter.model_dump(exclude_none=True):
        risks = store.get_filtered_risks(risk_filter)
    else:
        risks = store.get_all_risks()
    return [_to_view(store, r) for r in risks]


@router.get("/{risk_id}", response_model=RiskDetail)
async def get_risk(risk_id: int, store: MemoryStore = Depends(get_store)):
    risk = store.get_risk(risk_id)
    view = _to_view(store, risk)
    return RiskDetail(**view.model_dump(), events=store.get_risk_events(risk_id))


@router.post("", response_model=Risk, status_code=201)
async def create_risk(
    data: RiskCreate,
    store: MemoryStore = Depends(get_store),
    user: User = Depends(get_current_user),
    audit: AuditLogger = Depends(get_audit_logger),
):
    risk = store.create_risk(data, created_by=user.id)
    store.create_risk_event(
        risk.id,
        RiskEventType.STATUS_CHANGE,
        f"Risk created with status '{risk.status.value}'",
        created_by=user.id,
    )
    audit.log(
        AuditEntry(
            action="create",
            entity="risk",
            entity_id=risk.id,
            user_id=user.id,
            changes=data.model_dump(mode="json"),
        )
    )
    logger.info(f"Created {risk.reference_id} ({risk.severity.value})")
    return risk


@router.put("/{risk_id}", response_model=Risk)
async def update_risk(
    risk_id: int,
    updates: RiskUpdate,
    store: MemoryStore = Depends(get_store),
    user: User = Depends(get_current_user),
    audit: AuditLogger = Depends(get_audit_logger),
):
    existing = store.get_risk(risk_id)
    risk = store.update_risk(risk_id, updates)

    if risk.status != existing.status:
        store.create_risk_event(
            risk_id,
            RiskEventType.STATUS_CHANGE,
            f"Risk status changed from '{existing.status.value}' to '{risk.status.value}'",
            created_by=user.id,
        )

    audit.log(
        AuditEntry(
            action="update",
            entity="risk",
            entity_id=risk_id,
            user_id=user.id,
            changes=updates.model_dump(mode="json", exclude_unset=True),
        )
    )
    return risk


@router.delete("/{risk_id}")
async def delete_risk(
    risk_id: int,
    store: MemoryStore = Depends(get_store),
    user: User = Depends(get_current_user),
    audit: AuditLogger = Depends(get_audit_logger),
):
    store.delete_risk(risk_id)
    audit.log(AuditEntry(action="delete", entity="risk", entity_id=risk_id, user_id=user.id))
    return {"message": "Risk successfully deleted"}


@router.post("/{risk_id}/events", response_model=RiskEvent, status_code=201)
async def add_risk_event(
    risk_id: int,
    data: RiskEventCreate,
    store: MemoryStore = Depends(get_store),
    user: User = Depends(get_current_user),
    audit: AuditLogger = Depends(get_audit_logger),
):
    event = store.create_risk_event(
        risk_id, data.event_type, data.description, created_by=user.id
    )
    audit.log(
        AuditEntry(
            action="create",
            entity="risk_event",
            entity_id=event.id,
            user_id=user.id,
            changes={"risk_id": risk_id, **data.model_dump(mode="json")},
        )
    )
    return event
