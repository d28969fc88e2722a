"""ASGI entrypoint for the Training Demo Service.

Run with ``uvicorn services.training_demo_service.main:app``; settings come
from the environment. ``training-demo serve`` builds its own app instead.
"""

from __future__ import annotations

from services.training_demo_service.app import create_app

app = create_app()
