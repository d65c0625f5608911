"""
Audit Route — GET /api/audit (admins only)
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from riskpro.api.dependencies import get_audit_logger, get_current_user
from riskpro.audit.logger import AuditLogger
from riskpro.models.auth_models import User, UserRole

router = APIRouter(tags=["audit"])


@router.get("/api/audit")
async def recent_audit_entries(
    count: int = Query(default=50, ge=1, le=1000),
    user: User = Depends(get_current_user),
    audit: AuditLogger = Depends(get_audit_logger),
):
    if user.role != UserRole.ADMIN:
        raise HTTPException(status_code=403, detail="Admin role required")
    return audit.read_recent(count)
