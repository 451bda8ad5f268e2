# api/v1/__init__.py

from fastapi import APIRouter

# v1 router (mounted by app.py at /api)
router = APIRouter()

# Canonical in-memory state for v1
from .state import REGISTRY, SWEEP_POLICY  # noqa: E402

# Sub-routers
from .heartbeat import router as heartbeat_router  # noqa: E402
from .shutdown import router as shutdown_router  # noqa: E402
from .status import router as status_router  # noqa: E402

# Agent-facing (no auth)
router.include_router(heartbeat_router)

# Operator-facing
router.include_router(shutdown_router)
router.include_router(status_router)


__all__ = ["router", "REGISTRY", "SWEEP_POLICY"]
