# agent/loop.py
from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass
from typing import Callable, Mapping, Optional

from domain.fleet.policy import DEFAULT_HEARTBEAT_INTERVAL_SECONDS
from domain.fleet.state_machine import State

from .egress_http import AgentProtocolError, AgentTransportError, fetch_state
from .power import PowerController

log = logging.getLogger("agent")

EXIT_OK = 0
EXIT_BAD_SETTINGS = 1
EXIT_POWER_OFF_FAILED = 2

ERROR_SLEEP_S = 1.0

FetchFn = Callable[[str, str, str], State]


@dataclass(frozen=True)
class AgentSettings:
    api_pong_url: str
    group_name: str
    computer_name: str
    heartbeat_interval_s: float = DEFAULT_HEARTBEAT_INTERVAL_SECONDS
    simulate_power: bool = False

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "AgentSettings":
        env = os.environ if env is None else env

        missing = [k for k in ("SOL_API_PONG_URL", "SOL_GROUP_NAME", "SOL_COMPUTER_NAME") if not (env.get(k) or "").strip()]
        if missing:
            raise ValueError(f"Missing agent settings: {', '.join(missing)}")

        interval = float(env.get("HEARTBEAT_INTERVAL_S") or DEFAULT_HEARTBEAT_INTERVAL_SECONDS)
        if interval <= 0:
            raise ValueError("HEARTBEAT_INTERVAL_S must be positive")

        return cls(
            api_pong_url=env["SOL_API_PONG_URL"].strip().rstrip("/"),
            group_name=env["SOL_GROUP_NAME"].strip(),
            computer_name=env["SOL_COMPUTER_NAME"].strip(),
            heartbeat_interval_s=interval,
            simulate_power=(env.get("SOL_SIMULATE_POWER") or "").lower() in ("1", "true", "yes", "on"),
        )


def run_agent(
    settings: AgentSettings,
    power: PowerController,
    *,
    fetch: FetchFn = fetch_state,
    sleep: Callable[[float], None] = time.sleep,
    max_cycles: Optional[int] = None,
) -> int:
    """
    Pong forever (or max_cycles times) and power off when asked to.

    Only SHUTDOWN_REQUESTED triggers a power-off. The controller hands it out
    once, then reports SHUTDOWN_ACCEPTED, so a machine that survives its own
    shutdown does not loop on it.

    Returns an exit code: EXIT_OK when max_cycles runs out,
    EXIT_POWER_OFF_FAILED when the shutdown command failed.
    """
    cycle = 0
    while max_cycles is None or cycle < max_cycles:
        cycle += 1

        try:
            state = fetch(settings.api_pong_url, settings.group_name, settings.computer_name)
        except (AgentTransportError, AgentProtocolError) as e:
            log.warning(str(e), extra={"cycle": cycle})
            sleep(ERROR_SLEEP_S)
            continue

        if state == State.SHUTDOWN_REQUESTED:
            log.info("Shutdown requested...", extra={"group": settings.group_name, "computer": settings.computer_name})
            result = power.power_off()
            if not result.ok:
                log.error(result.message)
                return EXIT_POWER_OFF_FAILED
            log.info(result.message)

        sleep(settings.heartbeat_interval_s)

    return EXIT_OK
