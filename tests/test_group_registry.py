import pytest

from domain.fleet.errors import NoEligibleMembers, NotFound
from domain.fleet.group import GroupRegistry
from domain.fleet.state_machine import State


def _group(*names, now=0.0):
    g = GroupRegistry()
    for name in names:
        g.ensure_fresh(name, now)
    return g


def test_ensure_fresh_is_idempotent():
    g = GroupRegistry()
    first = g.ensure_fresh("a", now=1.0)
    first.request_shutdown()
    second = g.ensure_fresh("a", now=50.0)

    assert second is first
    assert second.state == State.SHUTDOWN_REQUESTED
    assert second.last_heartbeat == 1.0
    assert len(g) == 1


def test_get_member_unknown():
    g = _group("a")
    with pytest.raises(NotFound) as exc:
        g.get_member("zz")
    assert exc.value.reason == 'No computer with name "zz" in this group'


def test_group_shutdown_fans_out_to_every_online_member():
    g = _group("a", "b", "c")
    g.get_member("b").request_shutdown()

    requested = g.request_shutdown()

    assert sorted(requested) == ["a", "c"]
    assert g.get_member("a").state == State.SHUTDOWN_REQUESTED
    assert g.get_member("b").state == State.SHUTDOWN_REQUESTED
    assert g.get_member("c").state == State.SHUTDOWN_REQUESTED


def test_group_shutdown_leaves_accepted_members_alone():
    g = _group("a", "b")
    b = g.get_member("b")
    b.request_shutdown()
    b.accept_shutdown()

    assert g.request_shutdown() == ["a"]
    assert b.state == State.SHUTDOWN_ACCEPTED


def test_group_shutdown_fails_without_online_member():
    g = _group("a", "b")
    g.get_member("a").request_shutdown()
    b = g.get_member("b")
    b.request_shutdown()
    b.accept_shutdown()

    assert not g.has_any_eligible_for_shutdown()
    with pytest.raises(NoEligibleMembers):
        g.request_shutdown()

    assert g.get_member("a").state == State.SHUTDOWN_REQUESTED
    assert g.get_member("b").state == State.SHUTDOWN_ACCEPTED


def test_sweep_evicts_stale_members_in_any_state():
    g = _group("old", now=0.0)
    g.get_member("old").request_shutdown()
    g.ensure_fresh("new", now=10.0)

    evicted = g.sweep(now=16.0, threshold=16.0)

    assert evicted == ["old"]
    assert "old" not in g
    assert "new" in g
    assert not g.is_empty()


def test_sweep_can_empty_the_group():
    g = _group("a", "b", now=0.0)
    g.sweep(now=100.0, threshold=16.0)
    assert g.is_empty()
    assert len(g) == 0
