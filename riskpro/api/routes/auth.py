"""
Auth Routes — POST /api/auth/login, GET /api/auth/me

Both go through the configured AuthProvider; AuthError maps to 401.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from riskpro.api.dependencies import get_auth_provider, get_current_user
from riskpro.auth.providers import AuthProvider
from riskpro.models.auth_models import Credential, LoginRequest, LoginResponse, User

logger = logging.getLogger("riskpro.api.auth")

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    provider: AuthProvider = Depends(get_auth_provider),
):
    user = provider.identify_user(
        Credential(username=request.username, password=request.password)
    )
    logger.info(f"User '{user.username}' logged in via {provider.name}")
    return LoginResponse(user=user, token=provider.issue_token(user))


@router.get("/me", response_model=User)
async def me(user: User = Depends(get_current_user)):
    return user
