from __future__ import annotations
from dataclasses import dataclass

DEFAULT_HEARTBEAT_INTERVAL_SECONDS = 4.0
DEFAULT_STALENESS_MULTIPLIER = 4


@dataclass(frozen=True)
class SweepPolicy:
    heartbeat_interval_seconds: float = DEFAULT_HEARTBEAT_INTERVAL_SECONDS
    staleness_multiplier: int = DEFAULT_STALENESS_MULTIPLIER

    @property
    def threshold_seconds(self) -> float:
        # Always a multiple of the agent interval, never an absolute value.
        return self.staleness_multiplier * self.heartbeat_interval_seconds
