# domain/fleet/errors.py
from __future__ import annotations


class FleetError(Exception):
    """
    Base for every registry failure. The message is the reason string
    returned to the operator as-is.
    """

    @property
    def reason(self) -> str:
        return str(self)


class NotFound(FleetError):
    pass


class IneligibleState(FleetError):
    pass


class NoEligibleMembers(FleetError):
    pass


class LockUnavailable(FleetError):
    """
    The registry lock could not be acquired in time. Infrastructure fault,
    not a data one: the caller may retry.
    """


def group_not_found(group_name: str) -> NotFound:
    return NotFound(f'No group with name "{group_name}"')


def computer_not_found(computer_name: str) -> NotFound:
    return NotFound(f'No computer with name "{computer_name}" in this group')
