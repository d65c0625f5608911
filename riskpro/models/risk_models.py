"""
Risk Register Data Models — Risks, projects, risk events and filters.

Enumerations keep their declaration order: aggregation output follows it.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class RiskCategory(str, Enum):
    TECHNICAL = "Technical"
    FINANCIAL = "Financial"
    OPERATIONAL = "Operational"
    SECURITY = "Security"
    ORGANIZATIONAL = "Organizational"
    EXTERNAL = "External"


class Severity(str, Enum):
    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    VERY_LOW = "Very Low"


class RiskStatus(str, Enum):
    IDENTIFIED = "Identified"
    NEEDS_MITIGATION = "Needs Mitigation"
    IN_PROGRESS = "In Progress"
    MITIGATED = "Mitigated"
    CLOSED = "Closed"
    ACCEPTED = "Accepted"


TERMINAL_STATUSES: frozenset[RiskStatus] = frozenset(
    {RiskStatus.MITIGATED, RiskStatus.CLOSED}
)


class RiskEventType(str, Enum):
    STATUS_CHANGE = "Status Change"
    COMMENT = "Comment"
    UPDATE = "Update"


class ProjectStatus(str, Enum):
    ACTIVE = "Active"
    COMPLETED = "Completed"
    ON_HOLD = "On Hold"


class Risk(BaseModel):
    """A stored risk. `severity` is always derived from probability × impact."""

    id: int
    reference_id: str = Field(..., description="Human-facing reference, e.g. 'R-001'")
    title: str
    description: str | None = None
    category: RiskCategory
    probability: int = Field(..., ge=1, le=5)
    impact: int = Field(..., ge=1, le=5)
    severity: Severity
    status: RiskStatus = RiskStatus.IDENTIFIED
    mitigation_plan: str | None = None
    owner_id: int | None = None
    project_id: int | None = None
    created_by: int | None = None
    created_at: datetime
    updated_at: datetime


class RiskCreate(BaseModel):
    """Request body for creating a risk. Any `severity` sent is ignored."""

    title: str = Field(..., min_length=1)
    description: str | None = None
    category: RiskCategory
    probability: int = Field(..., ge=1, le=5, description="Likelihood on a 1-5 scale")
    impact: int = Field(..., ge=1, le=5, description="Impact on a 1-5 scale")
    status: RiskStatus = RiskStatus.IDENTIFIED
    mitigation_plan: str | None = None
    owner_id: int | None = None
    project_id: int | None = None


class RiskUpdate(BaseModel):
    """Partial update. Only fields explicitly sent are applied."""

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    category: RiskCategory | None = None
    probability: int | None = Field(default=None, ge=1, le=5)
    impact: int | None = Field(default=None, ge=1, le=5)
    status: RiskStatus | None = None
    mitigation_plan: str | None = None
    owner_id: int | None = None
    project_id: int | None = None


class RiskFilter(BaseModel):
    """Equality filters for listing risks; unset fields match everything."""

    category: RiskCategory | None = None
    status: RiskStatus | None = None
    severity: Severity | None = None
    project_id: int | None = None
    owner_id: int | None = None


class RiskEvent(BaseModel):
    id: int
    risk_id: int
    event_type: RiskEventType
    description: str
    created_at: datetime
    created_by: int | None = None


class RiskEventCreate(BaseModel):
    event_type: RiskEventType
    description: str = Field(..., min_length=1)


class OwnerRef(BaseModel):
    id: int
    name: str
    role: str


class ProjectRef(BaseModel):
    id: int
    name: str


class RiskView(Risk):
    """A risk with its owner and project resolved for display."""

    owner: OwnerRef | None = None
    project: ProjectRef | None = None


class RiskDetail(RiskView):
    """A risk with its event history, newest first."""

    events: list[RiskEvent] = Field(default_factory=list)


class SeveritySnapshot(BaseModel):
    """Point-in-time severity of a risk; `severity=None` marks deletion."""

    risk_id: int
    severity: Severity | None
    recorded_at: datetime


class Project(BaseModel):
    id: int
    name: str
    description: str | None = None
    status: ProjectStatus = ProjectStatus.ACTIVE
    created_at: datetime
    created_by: int | None = None


class ProjectCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: str | None = None
    status: ProjectStatus = ProjectStatus.ACTIVE


class ProjectUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    status: ProjectStatus | None = None
