"""Application configuration loaded from environment variables."""

from functools import lru_cache

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Webhook receiver settings with environment variable loading.

    ``github_webhook_secret`` has no default: a receiver without a secret
    would have nothing to verify signatures against.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    github_webhook_secret: SecretStr
    app_name: str = "hookrelay"
    debug: bool = False
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 9000
    webhook_path: str = "/webhook"

    @field_validator("github_webhook_secret")
    @classmethod
    def _secret_not_empty(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value():
            raise ValueError("github_webhook_secret must not be empty")
        return value

    @field_validator("webhook_path")
    @classmethod
    def _normalize_webhook_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("webhook_path must start with '/'")
        value = value.rstrip("/")
        if not value:
            raise ValueError("webhook_path must not be the root path")
        return value

    @property
    def secret_bytes(self) -> bytes:
        """The webhook secret encoded as the HMAC key."""
        return self.github_webhook_secret.get_secret_value().encode("utf-8")


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, loaded once on first use."""
    return Settings()  # type: ignore[call-arg]
