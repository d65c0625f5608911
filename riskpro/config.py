"""
RiskPro Configuration — pydantic-settings based.

All settings are read from environment variables or .env file.
Nothing is required at startup: without a Groq key the insight service
runs deterministic-only.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings sourced from environment variables."""

    # ── LLM (dashboard insights) ──
    groq_api_key: str | None = Field(
        default=None, description="Groq API key; unset means fallback insights only"
    )
    insights_model: str = Field(
        default="llama-3.3-70b-versatile",
        description="Model identifier for Groq completions",
    )
    llm_timeout: int = Field(default=30, description="LLM request timeout in seconds")
    llm_max_retries: int = Field(default=3, description="Max LLM retry attempts")
    llm_temperature: float = Field(default=0.7, description="LLM temperature")
    llm_max_tokens: int = Field(default=2048, description="Token cap per completion")

    # ── Auth ──
    auth_provider: Literal["anonymous", "local", "session"] = Field(
        default="anonymous",
        description="Which AuthProvider variant identifies request users",
    )
    session_secret: str = Field(
        default="dev-secret-change-in-production",
        description="Signing key for session tokens",
    )
    session_max_age: int = Field(
        default=86400, description="Session token lifetime in seconds"
    )
    default_user_id: int = Field(
        default=1, description="User attributed to requests under anonymous auth"
    )
    bcrypt_rounds: int = Field(
        default=12, ge=4, le=31, description="bcrypt cost factor for new hashes"
    )

    # ── Dashboard ──
    trend_mode: Literal["history", "synthetic"] = Field(
        default="history",
        description="'history' buckets recorded snapshots; 'synthetic' is placeholder data",
    )
    trend_months: int = Field(default=6, ge=1, description="Months in the trend series")
    top_risks_limit: int = Field(default=5, ge=0, description="Top risks on the dashboard")
    dashboard_insight_limit: int = Field(
        default=4, ge=0, description="Insights passed through to the dashboard"
    )

    # ── Storage ──
    seed_demo_data: bool = Field(
        default=True, description="Populate the in-memory store with demo records"
    )

    # ── Server ──
    port: int = Field(default=5000, description="Server port")
    host: str = Field(default="0.0.0.0", description="Server bind host")
    cors_origins: list[str] = Field(
        default=["*"], description="Allowed CORS origins"
    )

    # ── Audit ──
    audit_log_path: str = Field(
        default="audit.jsonl", description="Path to JSON-lines audit log file"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "RISKPRO_",
        "case_sensitive": False,
    }


VERSION = "1.0.0"

# Singleton instance — imported by other modules
settings = Settings()
