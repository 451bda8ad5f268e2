# api/v1/status.py
from __future__ import annotations

from typing import Dict, Iterable, Optional

from fastapi import APIRouter, Depends

from domain.fleet.errors import FleetError
from domain.fleet.infrastructure import ComputerSnapshot

from .auth import require_operator
from .errors import to_http
from .state import REGISTRY, SWEEP_POLICY

router = APIRouter(tags=["operators"])

StatusView = Dict[str, Dict[str, Dict[str, str]]]


def to_status_view(snapshot: Iterable[ComputerSnapshot]) -> StatusView:
    """
    {group: {computer: {"state": "<wire state>"}}}
    """
    out: StatusView = {}
    for item in snapshot:
        out.setdefault(item.group_name, {})[item.computer_name] = {"state": item.state.value}
    return out


@router.get("/status")
def status(operator: Optional[str] = Depends(require_operator)) -> StatusView:
    """
    Fleet view for operators. Stale computers, and groups left empty by
    them, are evicted before the snapshot is taken.
    """
    try:
        snapshot = REGISTRY.status(SWEEP_POLICY)
    except FleetError as e:
        raise to_http(e)
    return to_status_view(snapshot)
