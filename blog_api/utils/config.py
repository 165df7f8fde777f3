# Configuration module for environment setup
# This module is imported by: main.py (app factory), core/security.py, core/database.py
# Dependencies: python-dotenv, pydantic
# Purpose: Centralized configuration management loaded from .env + environment

import logging
import os  # For accessing environment variables from system
from functools import lru_cache
from typing import List

from dotenv import load_dotenv  # For loading .env files into environment
from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

DEFAULT_SECRET_KEY = "change-me-in-production"


class Settings(BaseModel):
    """Runtime settings. Values come from environment variables (see load_environment)."""
    model_config = ConfigDict(frozen=True)

    database_url: str = "sqlite:///./app.db"
    secret_key: str = DEFAULT_SECRET_KEY
    jwt_algorithm: str = "HS256"
    # 0 issues tokens without an "exp" claim
    access_token_expire_minutes: int = Field(60, ge=0)
    bcrypt_rounds: int = Field(12, ge=4, le=31)
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"]
    )
    enable_test_routes: bool = False
    log_level: str = "INFO"

    @field_validator("database_url", "secret_key")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must be a non-empty string")
        return v.strip()

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, v):
        # Accept "a,b,c" straight from the environment
        if isinstance(v, str):
            return [o.strip() for o in v.split(",") if o.strip()]
        return v

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        level = (v or "INFO").strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level {v!r}")
        return level


# Env var name -> Settings field
_ENV_KEYS = {
    "DATABASE_URL": "database_url",
    "SECRET_KEY": "secret_key",
    "JWT_ALGORITHM": "jwt_algorithm",
    "ACCESS_TOKEN_EXPIRE_MINUTES": "access_token_expire_minutes",
    "BCRYPT_ROUNDS": "bcrypt_rounds",
    "CORS_ORIGINS": "cors_origins",
    "ENABLE_TEST_ROUTES": "enable_test_routes",
    "LOG_LEVEL": "log_level",
}


def load_environment() -> Settings:
    """
    Load environment variables from .env file and build validated Settings
    Called by: get_settings()
    Raises: pydantic.ValidationError if a variable has an invalid value
    """
    load_dotenv()  # Load variables from .env file into environment (existing env wins)
    values = {field: os.getenv(env) for env, field in _ENV_KEYS.items() if os.getenv(env) is not None}
    settings = Settings(**values)
    if settings.secret_key == DEFAULT_SECRET_KEY:
        logger.warning("SECRET_KEY not set; using the built-in development key")
    return settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, loaded once."""
    return load_environment()
