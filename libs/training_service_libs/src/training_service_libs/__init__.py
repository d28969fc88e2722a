"""
Training Service Libraries Package.

Shared logging and configuration utilities used across the training
demo services.
"""

from .config import Environment, ServiceSettings
from .logging_utils import configure_service_logging, create_service_logger

__all__ = [
    "Environment",
    "ServiceSettings",
    "configure_service_logging",
    "create_service_logger",
]
