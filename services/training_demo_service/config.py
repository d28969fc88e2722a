"""Configuration for the Training Demo Service.

Uses Pydantic settings for environment-based configuration. The settings
object is frozen: it is built once at startup and handed to the application
factory.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import SettingsConfigDict
from training_service_libs.config import Environment, ServiceSettings

DEFAULT_EXTERNAL_URL = "https://jsonplaceholder.typicode.com/posts/1"


class TrainingDemoSettings(ServiceSettings):
    """Configuration settings for the Training Demo Service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="TRAINING_DEMO_",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Service identity
    SERVICE_NAME: str = "training-demo-service"

    # Gates the "debug" field of error responses
    ENVIRONMENT: Environment = Field(
        default=Environment.PRODUCTION,
        validation_alias="ENVIRONMENT",  # Read from global ENVIRONMENT var
        description="Runtime environment for the service",
    )

    # HTTP server configuration
    HOST: str = Field(default="0.0.0.0", description="HTTP server host")
    PORT: int = Field(
        default=3000,
        validation_alias="PORT",  # Read from global PORT var
        description="HTTP server port",
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    # Static file serving
    STATIC_DIR: Path = Field(
        default=Path("public"),
        description="Directory whose files are served as static content",
    )

    # Request pipeline
    JSON_BODY_LIMIT_BYTES: int = Field(
        default=100 * 1024,
        description="Largest JSON request body accepted by the body parser",
    )

    # External fetch
    DEFAULT_EXTERNAL_URL: str = Field(
        default=DEFAULT_EXTERNAL_URL,
        description="URL fetched by /api/external when no url parameter is given",
    )


def load_settings(**overrides: object) -> TrainingDemoSettings:
    """Build settings from the environment, applying explicit overrides on top."""
    return TrainingDemoSettings(**{k: v for k, v in overrides.items() if v is not None})
