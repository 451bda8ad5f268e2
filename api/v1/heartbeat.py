# api/v1/heartbeat.py
from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from domain.fleet.errors import FleetError

from .errors import to_http
from .state import REGISTRY

router = APIRouter(tags=["agents"])


@router.get("/pong")
def pong(
    group_name: str = Query(..., min_length=1, description="Group the computer belongs to"),
    computer_name: str = Query(..., min_length=1, description="Computer name, unique within its group"),
) -> str:
    """
    Agent heartbeat.

    Contract:
    - Agents call GET /api/pong every few seconds.
    - Unknown group/computer names register a fresh online computer; this
      endpoint never answers 404.
    - Body is the JSON string of the state: "online", "shutdown_requested"
      or "shutdown_accepted". "shutdown_requested" is returned exactly once
      per request: it is the only value an agent powers off on.
    """
    # Names are stored exactly as sent; only all-blank names are refused.
    if not group_name.strip() or not computer_name.strip():
        raise HTTPException(status_code=422, detail="group_name and computer_name must not be blank")

    try:
        state = REGISTRY.heartbeat(group_name, computer_name)
    except FleetError as e:
        raise to_http(e)

    return state.value
