"""
AWS Lambda entry point — Mangum adapter around the RiskPro FastAPI app.

The in-memory store lives for the lifetime of a warm container only.
"""

from mangum import Mangum

from riskpro.main import app

handler = Mangum(app, lifespan="off")
