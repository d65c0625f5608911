"""
Health Check Route — GET /health
"""

from __future__ import annotations

from fastapi import APIRouter

from riskpro.config import VERSION, settings

router = APIRouter()


@router.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "ok",
        "version": VERSION,
        "auth_provider": settings.auth_provider,
        "trend_mode": settings.trend_mode,
        "llm_configured": bool(settings.groq_api_key),
    }
