# domain/fleet/state_machine.py
from __future__ import annotations

import time
from enum import Enum
from typing import Optional

from .errors import IneligibleState


class State(str, Enum):
    """
    Command lifecycle of one computer.

    The values are the agent-facing wire strings. Agents parse them, so they
    must never change.
    """
    ONLINE = "online"
    SHUTDOWN_REQUESTED = "shutdown_requested"
    SHUTDOWN_ACCEPTED = "shutdown_accepted"

    @classmethod
    def parse(cls, text: str) -> "State":
        return cls(text)

    @property
    def rank(self) -> int:
        return _RANK[self]


_RANK = {
    State.ONLINE: 0,
    State.SHUTDOWN_REQUESTED: 1,
    State.SHUTDOWN_ACCEPTED: 2,
}


def _now() -> float:
    return time.time()


class ComputerState:
    """
    Per-computer state plus the time of its last heartbeat.

    Transitions only move forward:
      online -> shutdown_requested -> shutdown_accepted
    A computer only gets back to online by being evicted and recreated.
    """

    __slots__ = ("state", "last_heartbeat")

    def __init__(self, now: Optional[float] = None) -> None:
        self.state = State.ONLINE
        self.last_heartbeat = _now() if now is None else float(now)

    def record_heartbeat(self, now: Optional[float] = None) -> None:
        self.last_heartbeat = _now() if now is None else float(now)

    def is_eligible_for_shutdown(self) -> bool:
        return self.state == State.ONLINE

    def request_shutdown(self) -> None:
        if not self.is_eligible_for_shutdown():
            raise IneligibleState("Unable to shutdown a computer which is not in the online state")
        self.state = State.SHUTDOWN_REQUESTED

    def is_awaiting_acceptance(self) -> bool:
        return self.state == State.SHUTDOWN_REQUESTED

    def accept_shutdown(self) -> None:
        self.state = State.SHUTDOWN_ACCEPTED

    def is_stale(self, now: float, threshold: float) -> bool:
        return (now - self.last_heartbeat) >= threshold

    def __repr__(self) -> str:
        return f"ComputerState(state={self.state.value!r}, last_heartbeat={self.last_heartbeat:.3f})"
