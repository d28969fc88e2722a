"""Strict JSON parsing helpers."""

from __future__ import annotations

from typing import Any


def reject_non_json_constant(name: str) -> Any:
    """``parse_constant`` hook refusing ``NaN``, ``Infinity`` and ``-Infinity``."""
    raise ValueError(f"Unexpected token {name} in JSON")
