from functools import lru_cache
from typing import Self
from urllib.parse import urlparse

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PLACEHOLDER_SECRET = "change-this-to-a-secure-random-string"
MIN_SECRET_LENGTH = 32


def host_allowed(hostname: str, domains: list[str]) -> bool:
    return any(hostname == domain or hostname.endswith(f".{domain}") for domain in domains)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Fraternity Marketplace Identity API"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    enable_openapi: bool = True

    # Log context
    log_user_emails: bool = False

    # Database
    database_url: str
    database_migrations_url: str | None = None  # sync driver with DDL rights
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_ssl_mode: str = "prefer"  # disable, prefer, require, verify-ca, verify-full

    # Identity provider tokens
    identity_token_secret: str
    identity_token_algorithm: str = "HS256"
    identity_token_issuer: str | None = None
    identity_token_audience: str | None = None
    identity_token_expire_minutes: int = 60

    # Stripe Connect
    stripe_secret_key: str | None = None
    stripe_connect_country: str = "US"
    stripe_request_timeout_seconds: int = 20

    # Resend
    resend_api_key: str | None = None  # unset: emails are logged, not sent
    email_from: str = "noreply@example.com"
    email_send_timeout_seconds: int = 10

    # Invitation links
    app_url: str = "http://localhost:3000"
    allowed_app_url_domains: list[str] = ["localhost", "127.0.0.1"]
    invitation_expire_days: int = 14

    # HTTP surface
    cors_origins: list[str] = ["http://localhost:3000"]
    metrics_api_key: str | None = None
    rate_limit_storage_uri: str | None = None  # memory:// when unset
    apply_rate_limit: str = "10/minute"
    registration_rate_limit: str = "20/minute"

    @field_validator("identity_token_secret")
    @classmethod
    def check_identity_secret(cls, v: str) -> str:
        if v == PLACEHOLDER_SECRET:
            raise ValueError(
                "IDENTITY_TOKEN_SECRET must be changed from the placeholder "
                "(openssl rand -hex 32)"
            )
        if len(v) < MIN_SECRET_LENGTH:
            raise ValueError(
                f"IDENTITY_TOKEN_SECRET must be at least {MIN_SECRET_LENGTH} characters"
            )
        return v

    @field_validator("stripe_secret_key")
    @classmethod
    def check_stripe_secret_key(cls, v: str | None) -> str | None:
        """Blank means payments are not configured; publishable keys are refused."""
        v = (v or "").strip()
        if not v:
            return None
        if v.startswith("pk_"):
            raise ValueError("STRIPE_SECRET_KEY is a publishable key (pk_...), expected sk_...")
        return v

    @field_validator("cors_origins")
    @classmethod
    def check_cors_origins(cls, v: list[str]) -> list[str]:
        if "*" in v:
            raise ValueError("CORS wildcard '*' cannot be combined with credentials")
        return v

    @model_validator(mode="after")
    def check_app_url(self) -> Self:
        """APP_URL ends up in invitation emails, so it must point at a known host."""
        hostname = urlparse(self.app_url).hostname or ""
        if not host_allowed(hostname, self.allowed_app_url_domains):
            raise ValueError(
                f"APP_URL host '{hostname}' not in allowed list {self.allowed_app_url_domains}"
            )
        return self

    @property
    def payments_configured(self) -> bool:
        return self.stripe_secret_key is not None

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    return Settings()
