"""
Demo Seed Data — Users, projects, risks, events and insights for a fresh store.
"""

from __future__ import annotations

import logging

from riskpro.auth.passwords import hash_password
from riskpro.models.auth_models import UserRole
from riskpro.models.insight_models import InsightCreate, InsightType
from riskpro.models.risk_models import (
    ProjectCreate,
    RiskCategory,
    RiskCreate,
    RiskEventType,
    RiskStatus,
)
from riskpro.storage.memory_store import MemoryStore

logger = logging.getLogger("riskpro.storage.seed")


DEMO_USERS = [
    ("admin", "admin123", "Admin User", "admin@riskpro.com", UserRole.ADMIN),
    ("riskmgr", "risk123", "Sarah Johnson", "sarah@riskpro.com", UserRole.RISK_MANAGER),
    ("projectmgr", "project123", "Alex Cheng", "alex@riskpro.com", UserRole.PROJECT_MANAGER),
    ("viewer", "viewer123", "John Watson", "john@riskpro.com", UserRole.VIEWER),
    ("maya", "maya123", "Maya Rodriguez", "maya@riskpro.com", UserRole.PROJECT_MANAGER),
    ("david", "david123", "David Kim", "david@riskpro.com", UserRole.RISK_MANAGER),
]

DEMO_PROJECTS = [
    (ProjectCreate(name="Cloud Migration", description="Migrate on-premise systems to cloud infrastructure"), 1),
    (ProjectCreate(name="ERP Implementation", description="Implement new enterprise resource planning system"), 1),
    (ProjectCreate(name="Mobile App Development", description="Develop new mobile application for customers"), 3),
]

# (risk, created_by)
DEMO_RISKS = [
    (RiskCreate(
        title="Data migration failure during system cutover",
        description="Risk of data loss or corruption during the migration process",
        category=RiskCategory.TECHNICAL, probability=4, impact=5,
        status=RiskStatus.NEEDS_MITIGATION,
        mitigation_plan="Implement comprehensive data backup strategy and perform multiple test migrations",
        owner_id=3, project_id=1,
    ), 2),
    (RiskCreate(
        title="Insufficient testing of security controls before deployment",
        description="Security vulnerabilities may be introduced due to insufficient testing",
        category=RiskCategory.SECURITY, probability=3, impact=5,
        status=RiskStatus.IN_PROGRESS,
        mitigation_plan="Engage third-party security auditor to perform penetration testing",
        owner_id=6, project_id=1,
    ), 2),
    (RiskCreate(
        title="Key stakeholder departure during critical project phase",
        description="Loss of key project sponsor or stakeholder may impact decision making",
        category=RiskCategory.ORGANIZATIONAL, probability=3, impact=4,
        status=RiskStatus.NEEDS_MITIGATION,
        mitigation_plan="Document all key decisions and ensure multiple stakeholders are engaged",
        owner_id=4, project_id=2,
    ), 1),
    (RiskCreate(
        title="Budget overrun due to unforeseen infrastructure requirements",
        description="Additional infrastructure requirements may exceed allocated budget",
        category=RiskCategory.FINANCIAL, probability=4, impact=4,
        mitigation_plan="Perform detailed infrastructure assessment and include contingency budget",
        owner_id=2, project_id=1,
    ), 2),
    (RiskCreate(
        title="Vendor API integration delays affecting timeline",
        description="Dependency on third-party APIs may cause integration delays",
        category=RiskCategory.TECHNICAL, probability=4, impact=3,
        status=RiskStatus.IN_PROGRESS,
        mitigation_plan="Establish early communication with vendor and develop fallback interfaces",
        owner_id=5, project_id=3,
    ), 3),
    (RiskCreate(
        title="Regulatory compliance issues with data storage",
        description="New regulations may impact data storage and processing",
        category=RiskCategory.EXTERNAL, probability=2, impact=5,
        mitigation_plan="Engage legal team to review compliance requirements",
        owner_id=2, project_id=2,
    ), 1),
    (RiskCreate(
        title="User adoption resistance to new system",
        description="End users may resist adopting the new system due to change management issues",
        category=RiskCategory.ORGANIZATIONAL, probability=3, impact=3,
        mitigation_plan="Develop comprehensive training program and identify champions",
        owner_id=3, project_id=2,
    ), 3),
    (RiskCreate(
        title="Performance issues in production environment",
        description="System may experience performance degradation under production load",
        category=RiskCategory.TECHNICAL, probability=3, impact=4,
        status=RiskStatus.NEEDS_MITIGATION,
        mitigation_plan="Perform load testing and optimize database queries",
        owner_id=5, project_id=3,
    ), 3),
]

# (risk_id, event_type, description, created_by)
DEMO_EVENTS = [
    (1, RiskEventType.STATUS_CHANGE, "Risk status changed from Identified to Needs Mitigation", 2),
    (2, RiskEventType.STATUS_CHANGE, "Risk status changed from Identified to In Progress", 6),
    (2, RiskEventType.COMMENT, "Security team has begun implementing countermeasures", 6),
    (3, RiskEventType.STATUS_CHANGE, "Risk status changed from Identified to Needs Mitigation", 1),
    (5, RiskEventType.STATUS_CHANGE, "Risk status changed from Identified to In Progress", 3),
    (5, RiskEventType.COMMENT, "Initial contact made with vendor API team", 5),
]

DEMO_INSIGHTS = [
    InsightCreate(
        title="Potential Security Vulnerability Pattern",
        description=(
            "Based on your recent security risks, consider implementing additional "
            "penetration testing before deployment."
        ),
        type=InsightType.PATTERN,
        related_category=RiskCategory.SECURITY,
    ),
    InsightCreate(
        title="Budget Risk Trend Analysis",
        description=(
            "Financial risks are concentrated in infrastructure spend. Consider reviewing "
            "vendor contracts and infrastructure costs for potential optimizations."
        ),
        type=InsightType.TREND,
        related_category=RiskCategory.FINANCIAL,
    ),
    InsightCreate(
        title="Stakeholder Engagement Risk",
        description=(
            "Low engagement from key stakeholders may impact project decisions. "
            "Consider scheduling dedicated sessions with decision makers."
        ),
        type=InsightType.WARNING,
        related_category=RiskCategory.ORGANIZATIONAL,
    ),
    InsightCreate(
        title="Schedule Optimization",
        description=(
            "Testing-phase risks are still open. Consider adjusting resource "
            "allocation in advance."
        ),
        type=InsightType.SUGGESTION,
        related_category=RiskCategory.OPERATIONAL,
    ),
]


def seed_demo_data(store: MemoryStore) -> None:
    """Populate an empty store with the demo register."""
    if store.stats()["users"]:
        logger.info("Store already populated — skipping demo seed")
        return

    for username, password, name, email, role in DEMO_USERS:
        store.create_user(
            username=username,
            name=name,
            email=email,
            role=role,
            password_hash=hash_password(password),
        )

    for project, created_by in DEMO_PROJECTS:
        store.create_project(project, created_by=created_by)

    for risk, created_by in DEMO_RISKS:
        store.create_risk(risk, created_by=created_by)

    for risk_id, event_type, description, created_by in DEMO_EVENTS:
        store.create_risk_event(risk_id, event_type, description, created_by=created_by)

    for insight in DEMO_INSIGHTS:
        store.create_insight(insight)

    logger.info(f"Seeded demo data: {store.stats()}")
