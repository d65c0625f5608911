"""
Auth Data Models — Users and the credential shapes providers accept.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class UserRole(str, Enum):
    ADMIN = "Admin"
    RISK_MANAGER = "Risk Manager"
    PROJECT_MANAGER = "Project Manager"
    VIEWER = "Viewer"


class User(BaseModel):
    id: int
    username: str
    name: str
    email: str
    role: UserRole = UserRole.VIEWER
    password_hash: str = Field(default="", exclude=True, repr=False)
    created_at: datetime


class Credential(BaseModel):
    """
    Whatever the caller presented. Each provider reads the fields it needs:
    anonymous ignores everything, local reads username/password,
    session reads token.
    """

    username: str | None = None
    password: str | None = None
    token: str | None = None


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    user: User
    token: str | None = Field(
        default=None, description="Bearer token for the session provider"
    )
