# domain/fleet/guard.py
from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from typing import Iterator, List, Optional, Tuple

from lifecycle.lifecycle_log import lifecycle

from .errors import FleetError, LockUnavailable
from .infrastructure import ComputerSnapshot, InfrastructureRegistry, SweepReport
from .policy import SweepPolicy
from .state_machine import State

DEFAULT_ACQUIRE_TIMEOUT_S = 5.0


class LockedRegistry:
    """
    The one shared registry, behind one lock.

    Every public method is a single critical section: lazy create + read in
    heartbeat, sweep + snapshot in status. Nothing releases and re-acquires
    mid-operation, so all calls are linearizable.

    There is no backpressure. Load is bounded by fleet size times the
    heartbeat rate, which keeps contention negligible.
    """

    def __init__(
        self,
        registry: Optional[InfrastructureRegistry] = None,
        lock: Optional[threading.Lock] = None,
        *,
        acquire_timeout_s: float = DEFAULT_ACQUIRE_TIMEOUT_S,
    ) -> None:
        self._registry = registry if registry is not None else InfrastructureRegistry()
        self._lock = lock if lock is not None else threading.Lock()
        self.acquire_timeout_s = float(acquire_timeout_s)

    @property
    def lock(self) -> threading.Lock:
        return self._lock

    @contextmanager
    def session(self) -> Iterator[InfrastructureRegistry]:
        """
        Exclusive access to the raw registry. Do not keep the yielded object
        past the `with` block.
        """
        if not self._lock.acquire(timeout=self.acquire_timeout_s):
            lifecycle("lock_unavailable", timeout_s=self.acquire_timeout_s)
            raise LockUnavailable("Unable to acquire the lock")
        try:
            yield self._registry
        finally:
            self._lock.release()

    def heartbeat(self, group_name: str, computer_name: str, now: Optional[float] = None) -> State:
        with self.session() as registry:
            return registry.heartbeat(group_name, computer_name, now)

    def request_shutdown_computer(self, group_name: str, computer_name: str) -> None:
        with self.session() as registry:
            try:
                registry.request_shutdown_computer(group_name, computer_name)
            except FleetError as e:
                lifecycle("shutdown_rejected", group=group_name, computer=computer_name, reason=e.reason)
                raise

    def request_shutdown_group(self, group_name: str) -> List[str]:
        with self.session() as registry:
            try:
                return registry.request_shutdown_group(group_name)
            except FleetError as e:
                lifecycle("shutdown_rejected", group=group_name, computer=None, reason=e.reason)
                raise

    def sweep(self, policy: SweepPolicy, now: Optional[float] = None) -> SweepReport:
        if now is None:
            now = time.time()
        with self.session() as registry:
            return registry.sweep(now, policy.threshold_seconds)

    def status(self, policy: SweepPolicy, now: Optional[float] = None) -> List[ComputerSnapshot]:
        """
        Sweep, then snapshot, under the same lock hold.
        """
        if now is None:
            now = time.time()
        with self.session() as registry:
            registry.sweep(now, policy.threshold_seconds)
            return registry.snapshot()

    def counts(self) -> Tuple[int, int]:
        with self.session() as registry:
            return len(registry.group_names()), registry.computer_count()
