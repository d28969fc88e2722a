"""Custom exception classes for the Training Demo Service.

Each route catches only the errors of its own operation; anything else
reaches the terminal error handler.
"""

from __future__ import annotations


class TrainingDemoError(Exception):
    """Base exception for the Training Demo Service."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ExternalFetchError(TrainingDemoError):
    """Base class for failures of the outbound fetch."""


class ExternalTransportError(ExternalFetchError):
    """The outbound request could not be completed (DNS, connect, TLS, bad URL)."""


class ExternalParseError(ExternalFetchError):
    """The upstream body was received but is not valid JSON."""

    def __init__(self) -> None:
        super().__init__("Failed to parse response")
