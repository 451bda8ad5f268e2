# domain/fleet/infrastructure.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from lifecycle.lifecycle_log import lifecycle

from .errors import group_not_found
from .group import GroupRegistry
from .state_machine import ComputerState, State


@dataclass(frozen=True)
class ComputerSnapshot:
    """
    Externally visible view of one computer. The heartbeat time is left out
    on purpose: clients only ever see the state.
    """
    group_name: str
    computer_name: str
    state: State


@dataclass(frozen=True)
class SweepReport:
    evicted: List[Tuple[str, str]] = field(default_factory=list)
    removed_groups: List[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.evicted or self.removed_groups)


class InfrastructureRegistry:
    """
    Every known group, keyed by name.

    Invariant: right after a sweep, every group holds at least one computer.
    Not thread-safe by itself; see domain.fleet.guard.LockedRegistry.
    """

    def __init__(self) -> None:
        self._groups: Dict[str, GroupRegistry] = {}

    # -------------------------------------------------------------------------
    # Agent side
    # -------------------------------------------------------------------------

    def heartbeat(self, group_name: str, computer_name: str, now: Optional[float] = None) -> State:
        """
        Record a heartbeat and return the state the agent must act on.

        Unknown groups and computers are created on the fly, online. When a
        shutdown is pending it is accepted here, but this call still reports
        SHUTDOWN_REQUESTED so the agent sees the actionable signal exactly once.
        """
        group = self._groups.get(group_name)
        if group is None:
            group = GroupRegistry()
            self._groups[group_name] = group

        is_new = computer_name not in group
        computer = group.ensure_fresh(computer_name, now)
        if is_new:
            lifecycle("computer_registered", group=group_name, computer=computer_name)
        else:
            computer.record_heartbeat(now)

        if computer.is_awaiting_acceptance():
            computer.accept_shutdown()
            lifecycle("shutdown_delivered", group=group_name, computer=computer_name)
            return State.SHUTDOWN_REQUESTED

        return computer.state

    # -------------------------------------------------------------------------
    # Operator side
    # -------------------------------------------------------------------------

    def request_shutdown_computer(self, group_name: str, computer_name: str) -> None:
        computer = self._get_computer(group_name, computer_name)
        computer.request_shutdown()
        lifecycle("shutdown_requested", group=group_name, computer=computer_name)

    def request_shutdown_group(self, group_name: str) -> List[str]:
        requested = self._get_group(group_name).request_shutdown()
        lifecycle("group_shutdown_requested", group=group_name, computers=requested)
        return requested

    # -------------------------------------------------------------------------
    # Maintenance + reporting
    # -------------------------------------------------------------------------

    def sweep(self, now: float, threshold: float) -> SweepReport:
        """
        Evict stale computers, then drop every group left empty.

        Both happen in this one call, in that order, so a group whose last
        computer goes stale disappears in the same pass.
        """
        evicted: List[Tuple[str, str]] = []
        for group_name, group in self._groups.items():
            for computer_name in group.sweep(now, threshold):
                evicted.append((group_name, computer_name))
                lifecycle("computer_evicted", group=group_name, computer=computer_name)

        removed = [name for name, group in self._groups.items() if group.is_empty()]
        for name in removed:
            del self._groups[name]
            lifecycle("group_removed", group=name)

        return SweepReport(evicted=evicted, removed_groups=removed)

    def snapshot(self) -> List[ComputerSnapshot]:
        out: List[ComputerSnapshot] = []
        for group_name in sorted(self._groups):
            for computer_name, computer in sorted(self._groups[group_name], key=lambda kv: kv[0]):
                out.append(ComputerSnapshot(group_name, computer_name, computer.state))
        return out

    def group_names(self) -> List[str]:
        return sorted(self._groups)

    def computer_count(self) -> int:
        return sum(len(g) for g in self._groups.values())

    def __contains__(self, key: object) -> bool:
        """
        `"group" in registry` or `("group", "computer") in registry`.
        """
        if isinstance(key, tuple) and len(key) == 2:
            group = self._groups.get(key[0])
            return group is not None and key[1] in group
        return key in self._groups

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def _get_group(self, group_name: str) -> GroupRegistry:
        group = self._groups.get(group_name)
        if group is None:
            raise group_not_found(group_name)
        return group

    def _get_computer(self, group_name: str, computer_name: str) -> ComputerState:
        return self._get_group(group_name).get_member(computer_name)
