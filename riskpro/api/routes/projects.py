"""
Project Routes — GET/POST /api/projects, GET/PATCH/DELETE /api/projects/{id}
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from riskpro.api.dependencies import get_audit_logger, get_current_user, get_store
from riskpro.audit.logger import AuditLogger
from riskpro.models.audit_models import AuditEntry
from riskpro.models.auth_models import User
from riskpro.models.risk_models import Project, ProjectCreate, ProjectUpdate
from riskpro.storage.memory_store import MemoryStore

router = APIRouter(prefix="/api/projects", tags=["projects"])


@router.get("", response_model=list[Project])
async def list_projects(store: MemoryStore = Depends(get_store)):
    return store.get_all_projects()


@router.get("/{project_id}", response_model=Project)
async def get_project(project_id: int, store: MemoryStore = Depends(get_store)):
    return store.get_project(project_id)


@router.post("", response_model=Project, status_code=201)
async def create_project(
    data: ProjectCreate,
    store: MemoryStore = Depends(get_store),
    user: User = Depends(get_current_user),
    audit: AuditLogger = Depends(get_audit_logger),
):
    project = store.create_project(data, created_by=user.id)
    audit.log(
        AuditEntry(
            action="create",
            entity="project",
            entity_id=project.id,
            user_id=user.id,
            changes=data.model_dump(mode="json"),
        )
    )
    return project


@router.patch("/{project_id}", response_model=Project)
async def update_project(
    project_id: int,
    updates: ProjectUpdate,
    store: MemoryStore = Depends(get_store),
    user: User = Depends(get_current_user),
    audit: AuditLogger = Depends(get_audit_logger),
):
    project = store.update_project(project_id, updates)
    audit.log(
        AuditEntry(
            action="update",
            entity="project",
            entity_id=project_id,
            user_id=user.id,
            changes=updates.model_dump(mode="json", exclude_unset=True),
        )
    )
    return project


@router.delete("/{project_id}")
async def delete_project(
    project_id: int,
    store: MemoryStore = Depends(get_store),
    user: User = Depends(get_current_user),
    audit: AuditLogger = Depends(get_audit_logger),
):
    store.delete_project(project_id)
    audit.log(AuditEntry(action="delete", entity="project", entity_id=project_id, user_id=user.id))
    return {"message": "Project deleted successfully"}
