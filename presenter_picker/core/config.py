# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Core configuration — all env-driven, zero hardcode.
Single source of truth for every tunable parameter.
"""

import os


class Settings:
    """Application settings loaded from environment variables."""

    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "presenter-picker")
    SERVICE_VERSION: str = os.getenv("SERVICE_VERSION", "1.0.0")
    SERVICE_PORT: int = int(os.getenv("SERVICE_PORT", "8010"))

    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./presenter_picker.db")
    ROSTER_STORAGE_KEY: str = os.getenv("ROSTER_STORAGE_KEY", "iwmi_team_members")

    COUNTDOWN_SECONDS: int = int(os.getenv("COUNTDOWN_SECONDS", "5"))
    COUNTDOWN_INTERVAL_MS: int = int(os.getenv("COUNTDOWN_INTERVAL_MS", "1000"))
    HIGHLIGHT_INTERVAL_MS: int = int(os.getenv("HIGHLIGHT_INTERVAL_MS", "150"))
    REVEAL_DELAY_MS: int = int(os.getenv("REVEAL_DELAY_MS", "5000"))
    NOTIFICATION_DISPLAY_SECONDS: float = float(
        os.getenv("NOTIFICATION_DISPLAY_SECONDS", "2.2")
    )

    CORS_ORIGINS: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
