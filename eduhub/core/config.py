from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
import secrets


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables or .env.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"  # Ignore extra fields in .env file
    )

    # -------------------------
    # Security / Auth
    # -------------------------
    SECRET_KEY: str = Field(default_factory=lambda: secrets.token_urlsafe(32))
    ALGORITHM: str = "HS256"
    SESSION_EXPIRE_MINUTES: int = 60 * 24 * 7
    BCRYPT_ROUNDS: int = Field(
        default=12,
        ge=4,
        le=31,
        description="bcrypt cost factor used when hashing passwords"
    )

    # -------------------------
    # Application
    # -------------------------
    PROJECT_NAME: str = "EduHub API"
    API_V1_PREFIX: str = "/api/v1"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["http://localhost:5000"])

    # =========================================================
    # Demo Mode
    # =========================================================
    DEMO_SESSION_SECONDS: int = Field(
        default=600,
        ge=1,
        description="Lifetime of a demo session in seconds"
    )

    DEMO_WARNING_SECONDS: int = Field(
        default=60,
        ge=0,
        description="Remaining time at which a demo session is flagged as expiring"
    )

    DEMO_TICK_SECONDS: float = Field(
        default=1.0,
        gt=0,
        description="Interval of the background demo countdown tick"
    )

    # Disable to rely on request-time expiry checks only
    DEMO_TICKER_ENABLED: bool = True

    DEMO_EMAIL_DOMAIN: str = "eduhub.com"
    DEMO_PASSWORD: str = "demo123"

    @field_validator("ALGORITHM")
    def validate_algorithm(cls, v):
        if not v or not isinstance(v, str):
            raise ValueError("ALGORITHM must be a non-empty string.")
        return v

    @field_validator("LOG_LEVEL")
    def validate_log_level(cls, v):
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"LOG_LEVEL must be one of: {allowed}")
        return v.upper()


settings = Settings()
