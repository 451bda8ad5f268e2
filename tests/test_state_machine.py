import pytest

from domain.fleet.errors import IneligibleState
from domain.fleet.state_machine import ComputerState, State


def test_wire_strings_are_fixed():
    assert State.ONLINE.value == "online"
    assert State.SHUTDOWN_REQUESTED.value == "shutdown_requested"
    assert State.SHUTDOWN_ACCEPTED.value == "shutdown_accepted"
    assert len(list(State)) == 3


@pytest.mark.parametrize("text", ["online", "shutdown_requested", "shutdown_accepted"])
def test_parse_wire_string(text):
    assert State.parse(text).value == text


@pytest.mark.parametrize("text", ["", "Online", "ONLINE", "shutdown", "offline"])
def test_parse_rejects_unknown(text):
    with pytest.raises(ValueError):
        State.parse(text)


def test_rank_order():
    assert State.ONLINE.rank < State.SHUTDOWN_REQUESTED.rank < State.SHUTDOWN_ACCEPTED.rank


def test_new_computer_is_online():
    c = ComputerState(now=100.0)
    assert c.state == State.ONLINE
    assert c.last_heartbeat == 100.0
    assert c.is_eligible_for_shutdown()
    assert not c.is_awaiting_acceptance()


def test_record_heartbeat_refreshes_timestamp_only():
    c = ComputerState(now=100.0)
    c.request_shutdown()
    c.record_heartbeat(now=105.0)
    assert c.last_heartbeat == 105.0
    assert c.state == State.SHUTDOWN_REQUESTED


def test_request_shutdown_only_from_online():
    c = ComputerState(now=0.0)
    c.request_shutdown()
    assert c.state == State.SHUTDOWN_REQUESTED
    assert c.is_awaiting_acceptance()

    with pytest.raises(IneligibleState) as exc:
        c.request_shutdown()
    assert "not in the online state" in exc.value.reason
    assert c.state == State.SHUTDOWN_REQUESTED


def test_accepted_is_not_eligible():
    c = ComputerState(now=0.0)
    c.request_shutdown()
    c.accept_shutdown()
    assert c.state == State.SHUTDOWN_ACCEPTED
    assert not c.is_eligible_for_shutdown()
    assert not c.is_awaiting_acceptance()
    with pytest.raises(IneligibleState):
        c.request_shutdown()


def test_is_stale_boundary_is_inclusive():
    c = ComputerState(now=100.0)
    assert not c.is_stale(now=115.9, threshold=16.0)
    assert c.is_stale(now=116.0, threshold=16.0)
    assert c.is_stale(now=200.0, threshold=16.0)
