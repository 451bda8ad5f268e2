# domain/fleet/__init__.py
from .errors import FleetError, IneligibleState, LockUnavailable, NoEligibleMembers, NotFound
from .group import GroupRegistry
from .guard import LockedRegistry
from .infrastructure import ComputerSnapshot, InfrastructureRegistry, SweepReport
from .policy import SweepPolicy
from .state_machine import ComputerState, State

__all__ = [
    "ComputerSnapshot",
    "ComputerState",
    "FleetError",
    "GroupRegistry",
    "IneligibleState",
    "InfrastructureRegistry",
    "LockUnavailable",
    "LockedRegistry",
    "NoEligibleMembers",
    "NotFound",
    "State",
    "SweepPolicy",
    "SweepReport",
]
