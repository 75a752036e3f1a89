"""Pipeboard — Central Configuration via Pydantic Settings."""

import os
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables / .env file."""

    # ── Database ──
    database_url: str = ""

    # ── AI Providers ──
    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    sarvam_api_key: Optional[str] = None
    default_ai_provider: str = "sarvam"  # sarvam | openai | claude
    ai_timeout_seconds: float = 30.0

    # ── App ──
    log_level: str = "INFO"
    seed_placeholder_data: bool = True

    # ── Auth (mock identity layer) ──
    admin_email: str = "gestao@sharks.com"
    admin_user_id: str = "admin_master"
    admin_name: str = "DIRETORIA SHARKS"
    admin_password: str = "12345678"
    default_member_password: str = "12345678"
    min_password_length: int = 4

    # ── Team Roster ──
    team_roster: List[dict] = [
        {"name": "BRUNA MONTEIRO", "email": "bruna@sharks.com.br", "id": "user_bruna"},
        {"name": "ALESSANDRO", "email": "alessandro@sharks.com", "id": "user_alessandro"},
        {"name": "JANAINA", "email": "janaina@sharks.com", "id": "user_janaina"},
        {"name": "KAROLINE", "email": "karoline@sharks.com", "id": "user_karoline"},
        {"name": "ANA CAROLISE", "email": "anacarolise@sharks.com", "id": "user_anacarolise"},
        {"name": "LUCAS", "email": "lucas@sharks.com", "id": "user_lucas"},
        {"name": "DAVI", "email": "davi@sharks.com", "id": "user_davi"},
        {"name": "GIKA", "email": "gika@sharks.com", "id": "user_gika"},
    ]

    # ── Targets ──
    default_target_mrr: float = 7200.0
    default_target_revenue: float = 44200.0
    default_target_conversion_rate: float = 0.65
    default_target_deals_closed: int = 34
    admin_target_mrr: float = 25000.0
    admin_target_revenue: float = 150000.0
    admin_target_deals_closed: int = 100

    @property
    def effective_database_url(self) -> str:
        """Return PostgreSQL URL if set, otherwise fall back to SQLite."""
        if self.database_url:
            return self.database_url
        # Vercel has a read-only filesystem; use /tmp for SQLite
        if os.environ.get("VERCEL"):
            return "sqlite:////tmp/pipeboard.db"
        return "sqlite:///./pipeboard.db"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
