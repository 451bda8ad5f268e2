# api/v1/shutdown.py
from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, field_validator

from domain.fleet.errors import FleetError

from .auth import require_operator
from .errors import to_http
from .state import REGISTRY

router = APIRouter(tags=["operators"])


class ShutdownRequest(BaseModel):
    """
    Without computer_name the whole group is targeted: every computer that
    is online right now gets the request, the others are left as they are.
    """
    group_name: str = Field(..., min_length=1)
    computer_name: Optional[str] = Field(default=None, min_length=1)

    @field_validator("group_name", "computer_name")
    @classmethod
    def reject_blank(cls, v: Optional[str]) -> Optional[str]:
        # Same rule as /pong: kept verbatim, refused only when all blank.
        if v is not None and not v.strip():
            raise ValueError("must not be blank")
        return v


@router.post("/shutdown")
def request_shutdown(
    req: ShutdownRequest,
    operator: Optional[str] = Depends(require_operator),
) -> Dict[str, Any]:
    try:
        if req.computer_name is not None:
            REGISTRY.request_shutdown_computer(req.group_name, req.computer_name)
            requested = [req.computer_name]
        else:
            requested = REGISTRY.request_shutdown_group(req.group_name)
    except FleetError as e:
        raise to_http(e)

    return {
        "status": "ok",
        "group_name": req.group_name,
        "requested": requested,
        "operator": operator,
    }
