"""Configuration utilities shared by the training demo services."""

from __future__ import annotations

from enum import Enum

from pydantic_settings import BaseSettings


class Environment(str, Enum):
    """Defines application environments."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class ServiceSettings(BaseSettings):
    """Base settings with environment helpers.

    Subclasses declare their own ``ENVIRONMENT`` field and ``model_config``.
    """

    ENVIRONMENT: Environment = Environment.PRODUCTION

    def is_development(self) -> bool:
        """Return True when running in the development environment."""
        return self.ENVIRONMENT == Environment.DEVELOPMENT
