"""
Error types shared by the scoring core, the store and the auth layer.
"""

from __future__ import annotations


class InvalidArgument(ValueError):
    """Input outside the domain a core function accepts."""


class AuthError(Exception):
    """A credential could not be resolved to a user."""


class RiskNotFound(LookupError):
    def __init__(self, risk_id: int) -> None:
        super().__init__(f"Risk {risk_id} not found")
        self.risk_id = risk_id


class ProjectNotFound(LookupError):
    def __init__(self, project_id: int) -> None:
        super().__init__(f"Project {project_id} not found")
        self.project_id = project_id


class InsightNotFound(LookupError):
    def __init__(self, insight_id: int) -> None:
        super().__init__(f"Insight {insight_id} not found")
        self.insight_id = insight_id


class ProjectInUse(Exception):
    """A project still has risks attached and cannot be deleted."""
