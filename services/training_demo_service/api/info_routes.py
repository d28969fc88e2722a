"""Index route for the Training Demo Service."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter

from services.training_demo_service.api_models import InfoResponse

router = APIRouter()

WELCOME_MESSAGE = "Welcome to FOSSA CLI Training Demo"
TRAINING_WARNING = (
    "This application intentionally uses vulnerable packages for training purposes!"
)

# Dependencies the demo was built to expose to scanners, with their known issue
VULNERABLE_PACKAGES: dict[str, str] = {
    "express": "4.16.0 - Multiple vulnerabilities",
    "lodash": "4.17.4 - Prototype pollution",
    "moment": "2.19.0 - ReDoS vulnerability",
    "request": "2.88.0 - Deprecated, security issues",
    "minimist": "0.0.8 - Prototype pollution",
}

LOCAL_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@router.get("/", response_model=InfoResponse)
async def get_info() -> InfoResponse:
    """Describe the demo and the packages it intentionally depends on."""
    return InfoResponse(
        message=WELCOME_MESSAGE,
        timestamp=datetime.now().strftime(LOCAL_TIMESTAMP_FORMAT),
        vulnerable_packages=dict(VULNERABLE_PACKAGES),
        warning=TRAINING_WARNING,
    )
