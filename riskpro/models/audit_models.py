"""
Audit Data Models — One record per change to the risk register.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class AuditEntry(BaseModel):
    """Audit metadata for a register change."""

    action: Literal["create", "update", "delete", "dismiss"]
    entity: Literal["risk", "project", "risk_event", "insight"]
    entity_id: int
    user_id: int | None = None
    changes: dict[str, Any] = Field(
        default_factory=dict, description="Field values written by the change"
    )
