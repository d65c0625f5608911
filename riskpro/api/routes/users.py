"""
User Routes — GET /api/users (owner picker for the risk form)
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from riskpro.api.dependencies import get_store
from riskpro.models.auth_models import User
from riskpro.storage.memory_store import MemoryStore

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=list[User])
async def list_users(store: MemoryStore = Depends(get_store)):
    # password_hash is excluded by the User model
    return store.get_all_users()
