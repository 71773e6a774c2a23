"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from onboarding.core.exceptions import InvalidConfigurationError

BASE_DIR = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    APP_NAME: str = "Dealer Onboarding API"
    ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    DATABASE_URL: str = "postgresql+psycopg://postgres@localhost:5432/dealer_onboarding"

    # Public base URL of this API, used to build verify/resend links.
    BASE_URL: str = "http://localhost:8000"
    SUPPORT_URL: str = "https://support.example.com"
    LOGO_URL: str = "https://onboarding.ultralead.ai/logo.png"
    CHECKOUT_URL_US: str = ""
    CHECKOUT_URL_CA: str = ""

    VERIFICATION_TOKEN_EXPIRE_HOURS: int = 24
    VERIFICATION_SECRET_LENGTH: int = 32

    SMTP_HOST: str = ""
    SMTP_PORT: int = 587
    SMTP_USER: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_FROM: str = ""
    SMTP_TLS: bool = True
    MAIL_FROM_NAME: str = "Ultralead AI"

    CORS_ORIGINS: str = "http://localhost:3000"
    # Extra origins accepted outside production (preview deployments, local GUIs).
    DEV_CORS_ORIGIN_REGEX: str = r"https://.*carbeeza\.vercel\.app|http://localhost:3000"

    SEARCH_RESULT_LIMIT: int = 10

    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_WINDOW_SECONDS: int = 60
    RATE_LIMIT_MAX_REQUESTS: int = 120
    RATE_LIMIT_SIGNUP_MAX_REQUESTS: int = 10
    RATE_LIMIT_VERIFICATION_MAX_REQUESTS: int = 20
    RATE_LIMIT_SEARCH_MAX_REQUESTS: int = 240

    model_config = SettingsConfigDict(env_file=str(BASE_DIR / ".env"), env_file_encoding="utf-8")

    @property
    def is_production(self) -> bool:
        return self.ENV.lower() in {"production", "prod"}

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def cors_origin_regex(self) -> str | None:
        if self.is_production:
            return None
        return self.DEV_CORS_ORIGIN_REGEX.strip() or None

    @property
    def base_url(self) -> str:
        return self.BASE_URL.rstrip("/")

    def checkout_url_for(self, country: str | None) -> str:
        return self.CHECKOUT_URL_US if country == "US" else self.CHECKOUT_URL_CA

    def validate_runtime_security(self) -> None:
        if not self.is_production:
            return
        if not self.BASE_URL.startswith("https://"):
            raise InvalidConfigurationError("BASE_URL must be https in production", setting="BASE_URL")
        if not self.SMTP_HOST or not self.SMTP_FROM:
            raise InvalidConfigurationError("SMTP must be configured in production", setting="SMTP_HOST")


settings = Settings()
