# api/v1/auth.py
from __future__ import annotations

import logging
import secrets
from typing import Dict, Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPBasic, HTTPBasicCredentials

import settings

log = logging.getLogger("auth")

_basic = HTTPBasic(auto_error=False)

# Loaded once at import. Tests swap it through set_operators().
_OPERATORS: Dict[str, str] = settings.parse_operators()


def set_operators(operators: Dict[str, str]) -> None:
    global _OPERATORS
    _OPERATORS = dict(operators)


def auth_enabled() -> bool:
    return bool(_OPERATORS)


def require_operator(credentials: Optional[HTTPBasicCredentials] = Depends(_basic)) -> Optional[str]:
    """
    Guard for operator routes (shutdown, status). Agents never authenticate.

    Returns the operator name, or None when no operators are configured.
    """
    if not _OPERATORS:
        return None

    unauthorized = HTTPException(
        status_code=401,
        detail="Invalid username or password",
        headers={"WWW-Authenticate": "Basic"},
    )
    if credentials is None:
        raise unauthorized

    expected = _OPERATORS.get(credentials.username)
    # Compare even for unknown users so timing does not leak who exists.
    candidate = expected if expected is not None else ""
    password_ok = secrets.compare_digest(
        credentials.password.encode("utf-8"), candidate.encode("utf-8")
    )
    if expected is None or not password_ok:
        log.warning("operator auth failed", extra={"username": credentials.username})
        raise unauthorized

    return credentials.username
