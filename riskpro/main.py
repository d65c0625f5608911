"""
RiskPro FastAPI Application — Risk register API.

  /api/risks, /api/projects  → register CRUD (severity derived server-side)
  GET /api/dashboard         → composed RiskSummary
  /api/insights, /api/ai/... → stored insights and risk analysis
  /api/auth/..., /api/users  → configured AuthProvider, owner list
  GET /health                → {"status": "ok", ...}
"""

from __future__ import annotations

import logging

from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from riskpro.api.routes.audit import router as audit_router
from riskpro.api.routes.auth import router as auth_router
from riskpro.api.routes.dashboard import router as dashboard_router
from riskpro.api.routes.health import router as health_router
from riskpro.api.routes.insights import router as insights_router
from riskpro.api.routes.projects import router as projects_router
from riskpro.api.routes.risks import router as risks_router
from riskpro.api.routes.users import router as users_router
from riskpro.config import VERSION, settings
from riskpro.errors import (
    AuthError,
    InsightNotFound,
    InvalidArgument,
    ProjectInUse,
    ProjectNotFound,
    RiskNotFound,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("riskpro")

app = FastAPI(
    title="RiskPro",
    description="Project risk register with severity scoring and dashboards",
    version=VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(risks_router)
app.include_router(projects_router)
app.include_router(dashboard_router)
app.include_router(insights_router)
app.include_router(audit_router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Validation error on {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request data", "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(InvalidArgument)
async def invalid_argument_handler(request: Request, exc: InvalidArgument):
    logger.warning(f"Invalid argument on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=400, content={"message": str(exc)})


@app.exception_handler(ProjectInUse)
async def project_in_use_handler(request: Request, exc: ProjectInUse):
    return JSONResponse(status_code=400, content={"message": str(exc)})


@app.exception_handler(AuthError)
async def auth_error_handler(request: Request, exc: AuthError):
    return JSONResponse(
        status_code=401,
        content={"message": str(exc)},
        headers={"WWW-Authenticate": "Bearer"},
    )


@app.exception_handler(RiskNotFound)
@app.exception_handler(ProjectNotFound)
@app.exception_handler(InsightNotFound)
async def not_found_handler(request: Request, exc: LookupError):
    return JSONResponse(status_code=404, content={"message": str(exc)})


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
