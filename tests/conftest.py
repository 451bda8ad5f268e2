import pytest
from fastapi.testclient import TestClient

from domain.fleet.guard import LockedRegistry
from domain.fleet.infrastructure import InfrastructureRegistry


@pytest.fixture
def registry():
    return InfrastructureRegistry()


@pytest.fixture
def guard():
    return LockedRegistry(acquire_timeout_s=0.05)


@pytest.fixture
def client(monkeypatch, guard):
    """
    TestClient over the real app, wired to a fresh registry and with
    operator auth disabled.
    """
    import app as app_mod
    from api.v1 import auth, heartbeat, shutdown, status

    for mod in (app_mod, heartbeat, shutdown, status):
        monkeypatch.setattr(mod, "REGISTRY", guard)
    monkeypatch.setattr(auth, "_OPERATORS", {})

    return TestClient(app_mod.app)
