# api/v1/errors.py
from __future__ import annotations

from fastapi import HTTPException

from domain.fleet.errors import (
    FleetError,
    IneligibleState,
    LockUnavailable,
    NoEligibleMembers,
    NotFound,
)

_STATUS_BY_ERROR = (
    (NotFound, 404),
    (IneligibleState, 409),
    (NoEligibleMembers, 409),
    (LockUnavailable, 503),
)


def to_http(err: FleetError) -> HTTPException:
    """
    Map a registry failure to the HTTP error the operator sees.
    The detail is always the registry's reason string.
    """
    for kind, status_code in _STATUS_BY_ERROR:
        if isinstance(err, kind):
            return HTTPException(status_code=status_code, detail=err.reason)
    return HTTPException(status_code=400, detail=err.reason)
