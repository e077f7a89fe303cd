"""
Configuration management using Pydantic Settings.

Environment variables are loaded from .env file or system environment.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Main application settings"""

    # Backend Configuration
    backend_url: str = Field(default="http://localhost:8080/", description="Base URL of the game backend")
    backend_timeout: float = Field(default=10.0, description="Seconds before a backend call is abandoned")

    # Operation Broker Configuration
    operation_delay: float = Field(default=1.0, description="Seconds until a scheduled operation finishes")
    subscriber_queue_size: int = Field(default=100, description="Undelivered events kept per subscriber")

    # Per-deployment operation overrides
    operations_config: str | None = Field(default=None, description="Path to operations YAML, default config/operations.yaml")

    # Server Configuration
    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=3000, description="Server port")
    reload: bool = Field(default=True, description="Enable auto-reload in development")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Singleton instance
settings = Settings()
