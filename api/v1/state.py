# api/v1/state.py
import settings
from domain.fleet.guard import LockedRegistry

# Process-wide registry, shared by every request handler and the sweeper.
# Created empty at startup, never persisted.
REGISTRY = LockedRegistry(acquire_timeout_s=settings.LOCK_TIMEOUT_S)

SWEEP_POLICY = settings.sweep_policy()
