# agent/egress_http.py
from __future__ import annotations

import json
import urllib.error
import urllib.parse
import urllib.request

from domain.fleet.state_machine import State


class AgentTransportError(Exception):
    pass


class AgentProtocolError(Exception):
    pass


def pong_url(api_pong_url: str, group_name: str, computer_name: str) -> str:
    base = api_pong_url.rstrip("/")
    query = urllib.parse.urlencode({"group_name": group_name, "computer_name": computer_name})
    return f"{base}?{query}"


def fetch_state(api_pong_url: str, group_name: str, computer_name: str, timeout_s: float = 10.0) -> State:
    """
    One heartbeat. GET the pong endpoint and parse the JSON-encoded state.

    Raises AgentTransportError when the controller cannot be reached and
    AgentProtocolError when it answers something that is not a known state.
    """
    req = urllib.request.Request(
        url=pong_url(api_pong_url, group_name, computer_name),
        headers={"Accept": "application/json"},
        method="GET",
    )

    try:
        with urllib.request.urlopen(req, timeout=timeout_s) as resp:
            body = resp.read()
    except (urllib.error.URLError, OSError) as e:
        raise AgentTransportError(f"Unable to pong the API: <{e}>") from e

    return parse_state(body)


def parse_state(body: bytes) -> State:
    try:
        raw = json.loads(body.decode("utf-8"))
        if not isinstance(raw, str):
            raise ValueError(raw)
        return State.parse(raw)
    except (UnicodeDecodeError, ValueError) as e:
        raise AgentProtocolError("Invalid response format from the API") from e
