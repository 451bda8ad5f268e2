# settings.py
#
# Every tunable comes from the environment. Defaults suit a small LAN.
import os
from typing import Dict

from domain.fleet.policy import (
    DEFAULT_HEARTBEAT_INTERVAL_SECONDS,
    DEFAULT_STALENESS_MULTIPLIER,
    SweepPolicy,
)

BIND_IP = os.getenv("BIND_IP", "0.0.0.0")
BIND_PORT = os.getenv("BIND_PORT", "8000")

# Agents pong every HEARTBEAT_INTERVAL_S; a computer silent for
# STALENESS_MULTIPLIER intervals is evicted.
HEARTBEAT_INTERVAL_S = float(os.getenv("HEARTBEAT_INTERVAL_S", str(DEFAULT_HEARTBEAT_INTERVAL_SECONDS)))
STALENESS_MULTIPLIER = int(os.getenv("STALENESS_MULTIPLIER", str(DEFAULT_STALENESS_MULTIPLIER)))

# 0 disables the background sweeper; /api/status still sweeps.
SWEEP_INTERVAL_S = float(os.getenv("SWEEP_INTERVAL_S", "0"))
SWEEPER_LOG_EVERY_N = int(os.getenv("SWEEPER_LOG_EVERY_N", "30"))

LOCK_TIMEOUT_S = float(os.getenv("LOCK_TIMEOUT_S", "5"))

# "alice:secret,bob:hunter2". Empty means no operator auth.
SOL_OPERATORS = os.getenv("SOL_OPERATORS", "")


def sweep_policy() -> SweepPolicy:
    return SweepPolicy(
        heartbeat_interval_seconds=HEARTBEAT_INTERVAL_S,
        staleness_multiplier=STALENESS_MULTIPLIER,
    )


def bind_port(raw: str = BIND_PORT) -> int:
    try:
        port = int(raw)
    except (TypeError, ValueError):
        port = -1
    if not 0 <= port <= 65535:
        raise ValueError("The bind port must be an integer between 0 and 65535")
    return port


def parse_operators(raw: str = SOL_OPERATORS) -> Dict[str, str]:
    """
    Parse `user:password` pairs separated by commas. Blank items are
    skipped; an item without ':' is a configuration error.
    """
    out: Dict[str, str] = {}
    for item in (raw or "").split(","):
        item = item.strip()
        if not item:
            continue
        user, sep, password = item.partition(":")
        if not sep or not user:
            raise ValueError(f"Invalid operator entry {item!r}, expected user:password")
        out[user] = password
    return out
