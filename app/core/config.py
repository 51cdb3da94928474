"""Tradux configuration settings."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import structlog

logger = structlog.stdlib.get_logger().bind(component="config")

DEFAULT_TRANSLATOR_URL = "https://worker-proxy.seth-eb4.workers.dev/api/translate-json"


class TranslatorSettings(BaseSettings):
    """Remote translator configuration settings.

    The credentials are forwarded to the translation service on every call;
    they are never used by this process directly.
    """

    API_TOKEN: str = Field(default="", alias="CLOUDFLARE_API_TOKEN")
    ACCOUNT_ID: str = Field(default="", alias="CLOUDFLARE_ACCOUNT_ID")
    URL: str = Field(default=DEFAULT_TRANSLATOR_URL, alias="TRANSLATOR_URL")
    TIMEOUT_SECONDS: int = Field(default=60, alias="TRANSLATOR_TIMEOUT_SECONDS")
    MAX_RETRIES: int = Field(default=2, alias="TRANSLATOR_MAX_RETRIES")
    RETRY_BACKOFF_SECONDS: float = Field(
        default=2.0, alias="TRANSLATOR_RETRY_BACKOFF_SECONDS"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("API_TOKEN", "ACCOUNT_ID", mode="before")
    @classmethod
    def _strip_quotes(cls, v):
        """Tolerate values wrapped in an extra layer of quotes."""
        if isinstance(v, str):
            return v.strip().strip("'\"")
        return v

    @property
    def has_credentials(self) -> bool:
        """Both credentials are present."""
        return bool(self.API_TOKEN and self.ACCOUNT_ID)

    @property
    def credentials(self) -> dict:
        """Credentials in the shape expected by the translation service."""
        return {"apiToken": self.API_TOKEN, "accountId": self.ACCOUNT_ID}


class ProxySettings(BaseSettings):
    """Translation proxy service configuration settings."""

    AI_MODEL: str = Field(default="@cf/meta/m2m100-1.2b", alias="CLOUDFLARE_AI_MODEL")
    API_BASE_URL: str = Field(
        default="https://api.cloudflare.com/client/v4",
        alias="CLOUDFLARE_API_BASE_URL",
    )
    SOURCE_LANGUAGE: str = Field(default="english", alias="PROXY_SOURCE_LANGUAGE")
    TIMEOUT_SECONDS: int = Field(default=30, alias="PROXY_TIMEOUT_SECONDS")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


class Settings(BaseSettings):
    """Tradux configuration settings."""

    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"
    CONFIG_FILENAME: str = Field(default="tradux.config.json", alias="TRADUX_CONFIG")

    translator: TranslatorSettings
    proxy: ProxySettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production."""
        return self.ENVIRONMENT.lower() == "production"

    def __init__(self, **kwargs):
        settings_map = {
            "translator": TranslatorSettings,
            "proxy": ProxySettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )


# Create the settings instance
settings = Settings()
