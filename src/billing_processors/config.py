"""Configuration management for billing processor selection."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SelectionSettings(BaseSettings):
    """Weighted processor selection settings."""

    random_seed: int | None = Field(
        default=None,
        description="Seed for a reproducible random source (tests and local runs only)",
    )


class StripeProviderSettings(BaseSettings):
    """Stripe provider settings."""

    max_network_retries: int = Field(
        default=0,
        description="Retries performed by the Stripe client itself",
    )


class MockProviderSettings(BaseSettings):
    """Mock provider settings."""

    default_response: str = Field(
        default="approved",
        description="Response used when a mock config does not set one",
    )


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    debug: bool = Field(default=False, description="Debug mode")
    environment: str = Field(default="development", description="Environment name")
    log_level: str = Field(default="INFO", description="Root log level")

    selection: SelectionSettings = Field(default_factory=SelectionSettings)

    # Bundled providers
    stripe: StripeProviderSettings = Field(default_factory=StripeProviderSettings)
    mock: MockProviderSettings = Field(default_factory=MockProviderSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
    )


# Global settings instance
settings = Settings()
