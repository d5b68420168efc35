"""
labourconnect/core/config.py

Purpose: Application configuration

- Loads environment variables
- Centralizes config values (Mongo URI, Twilio Verify, reCAPTCHA, UI timings)
- Validates configuration on startup
- Environment-specific settings
"""

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings
from typing import Optional, Literal


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Validates all required configs on startup.
    """

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # MongoDB
    MONGODB_URL: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URI"
    )
    MONGODB_DB_NAME: str = Field(
        default="labourconnect",
        description="MongoDB database name"
    )

    # Twilio Verify (phone OTP)
    TWILIO_ACCOUNT_SID: Optional[str] = Field(
        default=None,
        description="Twilio account SID"
    )
    TWILIO_AUTH_TOKEN: Optional[str] = Field(
        default=None,
        description="Twilio auth token"
    )
    TWILIO_VERIFY_SERVICE_SID: Optional[str] = Field(
        default=None,
        description="Twilio Verify service SID (VAxxx...)"
    )
    TWILIO_VERIFY_BASE_URL: str = Field(
        default="https://verify.twilio.com/v2",
        description="Twilio Verify API base URL"
    )

    # Human verification challenge
    RECAPTCHA_SECRET_KEY: Optional[str] = Field(
        default=None,
        description="reCAPTCHA secret; challenge is skipped when unset"
    )
    RECAPTCHA_SITE_KEY: Optional[str] = Field(
        default=None,
        description="reCAPTCHA site key rendered into the login page"
    )
    RECAPTCHA_VERIFY_URL: str = Field(
        default="https://www.google.com/recaptcha/api/siteverify",
        description="reCAPTCHA token verification endpoint"
    )

    # Marketplace
    COUNTRY_CODE: str = Field(
        default="+91",
        description="Fixed national prefix for mobile numbers"
    )
    DEMO_MODE: bool = Field(
        default=False,
        description="Run without a backend: session-stored users and demo workers"
    )
    DEMO_OTP_CODE: str = Field(
        default="123456",
        description="Code accepted by the OTP flow in demo mode"
    )
    FREE_WORKER_LIMIT: int = Field(
        default=10,
        description="Workers a professional can add on the free plan"
    )
    DEFAULT_DAILY_RATE: int = Field(
        default=800,
        description="Daily rate used when registration leaves it blank"
    )
    PROFILE_PICTURE_MAX_BYTES: int = Field(
        default=5 * 1024 * 1024,
        description="Largest accepted profile picture upload"
    )

    # UI timings
    PAGE_RENDER_DELAY_MS: int = Field(
        default=50,
        description="Delay between the loading placeholder and the page render"
    )
    NOTIFICATION_TIMEOUT_MS: int = Field(
        default=5000,
        description="Notification banners are removed after this interval"
    )
    OTP_VALIDITY_SECONDS: int = Field(
        default=60,
        description="Countdown shown after an OTP is sent"
    )

    # Application
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    API_PREFIX: str = Field(
        default="/api/v1",
        description="API route prefix"
    )
    CORS_ORIGINS: list = Field(
        default=["*"],
        description="Allowed CORS origins"
    )
    HTTP_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        description="Timeout for outbound HTTP calls (Twilio, reCAPTCHA)"
    )

    # Security
    SECRET_KEY: str = Field(
        default="change-me-in-production",
        description="Secret used to sign the session cookie"
    )
    SESSION_MAX_AGE_DAYS: int = Field(
        default=30,
        description="Lifetime of the session cookie"
    )

    @field_validator("SECRET_KEY")
    @classmethod
    def validate_secret_key(cls, v: str, info: ValidationInfo) -> str:
        """Ensure secret key is changed in production."""
        if info.data.get("ENVIRONMENT") == "production" and v == "change-me-in-production":
            raise ValueError("SECRET_KEY must be changed in production environment")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    @property
    def twilio_configured(self) -> bool:
        """Check if Twilio Verify credentials are present."""
        return bool(
            self.TWILIO_ACCOUNT_SID
            and self.TWILIO_AUTH_TOKEN
            and self.TWILIO_VERIFY_SERVICE_SID
        )

    class Config:
        env_file = ".env"
        case_sensitive = True
        env_file_encoding = "utf-8"
        extra = "ignore"


# Global settings instance
settings = Settings()


def validate_settings():
    """
    Validates critical settings on application startup.
    Raises ValueError if any required setting is missing or invalid.
    """
    errors = []

    if not settings.MONGODB_URL and not settings.DEMO_MODE:
        errors.append("MONGODB_URL is required unless DEMO_MODE is enabled")

    if not settings.COUNTRY_CODE.startswith("+"):
        errors.append("COUNTRY_CODE must start with '+'")

    if settings.FREE_WORKER_LIMIT < 0:
        errors.append("FREE_WORKER_LIMIT must not be negative")

    # Production-specific validations
    if settings.is_production and not settings.DEMO_MODE:
        if not settings.twilio_configured:
            errors.append("Twilio Verify credentials are required in production")
        if not settings.RECAPTCHA_SECRET_KEY:
            errors.append("RECAPTCHA_SECRET_KEY is required in production")

    if errors:
        raise ValueError(f"Configuration validation failed: {', '.join(errors)}")

    return True
