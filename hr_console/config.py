"""
Application Configuration
"""
import logging
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "HR Management Console"
    app_version: str = "1.0.0"
    debug: bool = False

    # Backend
    database_url: str = "sqlite:///./data/app.db"
    secret_key: Optional[str] = None

    # Authentication
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    refresh_window_minutes: int = 10
    password_reset_expire_minutes: int = 60
    min_password_length: int = 6

    # Password reset mail (blank credentials -> simulated delivery)
    smtp_server: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_username: str = ""
    smtp_password: str = ""
    mail_sender: str = "HR Console <no-reply@localhost>"

    # Data
    seed_default_data: bool = True
    training_year: Optional[int] = None


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()


def log_configuration(cfg: Settings = settings) -> None:
    """Report which backend values are configured. Missing values are not fatal."""
    logger.info(f"Backend URL: {'configured' if cfg.database_url else 'missing'}")
    logger.info(f"Backend key: {'configured' if cfg.secret_key else 'missing'}")
    if not cfg.database_url:
        logger.error("DATABASE_URL is not set; data calls will fail")
    if not cfg.secret_key:
        logger.error("SECRET_KEY is not set; authentication calls will fail")
