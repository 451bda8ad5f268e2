# lifecycle/sweeper.py
#
# Computers that stop ponging are forgotten.
# Groups left with nobody in them go too.
#
# The sweeper only evicts. It never changes a command state.

import logging
import threading
import time
from typing import Optional

from domain.fleet.guard import LockedRegistry
from domain.fleet.errors import LockUnavailable
from domain.fleet.infrastructure import SweepReport
from domain.fleet.policy import SweepPolicy

log = logging.getLogger("sweeper")

DEFAULT_LOG_EVERY_N = 30


def sweep_once(guard: LockedRegistry, policy: SweepPolicy, now: Optional[float] = None) -> SweepReport:
    """
    One pass: evict stale computers, then empty groups, under the registry lock.
    """
    report = guard.sweep(policy, now)
    if report.changed:
        log.info(
            "sweep evicted=%d removed_groups=%d",
            len(report.evicted),
            len(report.removed_groups),
            extra={"evicted": report.evicted, "removed_groups": report.removed_groups},
        )
    return report


def start_sweeper(
    guard: LockedRegistry,
    policy: SweepPolicy,
    interval_s: float,
    *,
    log_every_n: int = DEFAULT_LOG_EVERY_N,
) -> threading.Thread:
    """
    Start the background sweeper thread.

    guard: the registry shared with request handlers
    policy: decides the staleness threshold (multiple of the heartbeat interval)
    interval_s: pause between passes; must be > 0

    Idempotent: a second call while the thread is alive returns that thread.
    """
    if interval_s <= 0:
        raise ValueError("interval_s must be positive")

    existing = getattr(start_sweeper, "_thread", None)
    if isinstance(existing, threading.Thread) and existing.is_alive():
        log.info("sweeper already running; skip start")
        return existing

    def loop() -> None:
        log.info(
            "sweeper started (interval=%ss threshold=%ss)",
            interval_s,
            policy.threshold_seconds,
        )
        cycle = 0
        while True:
            cycle += 1
            try:
                report = sweep_once(guard, policy)
                if not report.changed and cycle % max(log_every_n, 1) == 0:
                    groups, computers = guard.counts()
                    log.info("sweeper idle cycle=%d groups=%d computers=%d", cycle, groups, computers)
            except LockUnavailable:
                # Request handlers hold the lock; try again next cycle.
                log.warning("sweeper skipped cycle=%d: lock unavailable", cycle)

            time.sleep(interval_s)

    t = threading.Thread(target=loop, name="fleet-sweeper", daemon=True)
    t.start()

    setattr(start_sweeper, "_thread", t)
    return t
