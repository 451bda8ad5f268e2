# domain/fleet/group.py
from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

from .errors import NoEligibleMembers, computer_not_found
from .state_machine import ComputerState


class GroupRegistry:
    """
    Named set of computers that can be shut down with one command.

    No locking here: the owning InfrastructureRegistry is only ever touched
    under the single registry lock.
    """

    def __init__(self) -> None:
        self._members: Dict[str, ComputerState] = {}

    def ensure_fresh(self, computer_name: str, now: Optional[float] = None) -> ComputerState:
        """
        Get-or-insert. A new computer starts online with `now` as its
        heartbeat time; an existing one is returned untouched.
        """
        entry = self._members.get(computer_name)
        if entry is None:
            entry = ComputerState(now)
            self._members[computer_name] = entry
        return entry

    def has_any_eligible_for_shutdown(self) -> bool:
        return any(c.is_eligible_for_shutdown() for c in self._members.values())

    def request_shutdown(self) -> List[str]:
        """
        Request shutdown of every online computer in the group.

        Computers already past online are skipped. Fails without touching
        anything when no computer is online.

        Returns the names that transitioned.
        """
        if not self.has_any_eligible_for_shutdown():
            raise NoEligibleMembers("Unable to shutdown a group where no computer is in the online state")

        requested: List[str] = []
        for name, computer in self._members.items():
            if computer.is_eligible_for_shutdown():
                computer.request_shutdown()
                requested.append(name)
        return requested

    def get_member(self, computer_name: str) -> ComputerState:
        entry = self._members.get(computer_name)
        if entry is None:
            raise computer_not_found(computer_name)
        return entry

    def is_empty(self) -> bool:
        return not self._members

    def sweep(self, now: float, threshold: float) -> List[str]:
        """
        Evict every computer whose last heartbeat is at least `threshold`
        seconds old, whatever its state. Returns the evicted names.
        """
        stale = [name for name, c in self._members.items() if c.is_stale(now, threshold)]
        for name in stale:
            del self._members[name]
        return stale

    def __contains__(self, computer_name: object) -> bool:
        return computer_name in self._members

    def __iter__(self) -> Iterator[Tuple[str, ComputerState]]:
        return iter(list(self._members.items()))

    def __len__(self) -> int:
        return len(self._members)
