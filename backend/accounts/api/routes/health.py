"""Health Probe: liveness endpoint for container orchestration.

Invariants:
    - GET /health always returns 200 with body "ok" while the process is up
    - Independent of container state (no repository or handler dependency)
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_class=PlainTextResponse)
async def health_check():
    """Basic liveness probe."""
    return "ok"
