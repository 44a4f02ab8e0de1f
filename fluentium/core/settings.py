"""
Centralized settings (environment variables / .env) for browser sessions.
"""
# @file purpose: Centralized settings using Pydantic Settings.

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="FLUENTIUM_", env_file=".env", extra="ignore")

    browser: Literal["chromium", "firefox", "webkit"] = "chromium"
    headless: bool = True
    slow_mo_ms: int = Field(default=0, ge=0)
    default_timeout_seconds: float = Field(default=10.0, ge=0)
    poll_interval_seconds: float = Field(default=0.25, gt=0)
    alert_timeout_seconds: float = Field(default=10.0, ge=0)
    autoscroll: bool = False
    log_level: str = "INFO"


settings = Settings()
