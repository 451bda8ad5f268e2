# agent/power.py
from __future__ import annotations

import subprocess
import sys
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class PowerActionResult:
    ok: bool
    message: str


class PowerController:
    """
    Interface for powering off the local machine.
    Implementations return a structured result instead of raising.
    """
    def power_off(self) -> PowerActionResult:
        raise NotImplementedError


def shutdown_command(platform: Optional[str] = None) -> List[str]:
    platform = platform or sys.platform
    if platform.startswith("win"):
        return ["cmd", "/C", "shutdown -s -t 5"]
    return ["sh", "-c", "shutdown -h now"]


class SystemPowerController(PowerController):
    def __init__(self, platform: Optional[str] = None, timeout_s: float = 30.0) -> None:
        self.command = shutdown_command(platform)
        self.timeout_s = timeout_s

    def power_off(self) -> PowerActionResult:
        try:
            proc = subprocess.run(
                self.command,
                capture_output=True,
                text=True,
                timeout=self.timeout_s,
            )
        except (OSError, subprocess.SubprocessError) as e:
            return PowerActionResult(False, f"Unable to shutdown the computer: {e}")

        if proc.returncode != 0:
            detail = (proc.stderr or proc.stdout or "").strip()
            return PowerActionResult(False, f"Unable to shutdown the computer: exit={proc.returncode} {detail}")
        return PowerActionResult(True, "shutdown issued")


class SimulatedPowerController(PowerController):
    def __init__(self) -> None:
        self.calls = 0

    def power_off(self) -> PowerActionResult:
        self.calls += 1
        return PowerActionResult(True, "[SIMULATION] Would power OFF this computer")
