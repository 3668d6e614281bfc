"""Pytest configuration and shared fixtures."""

import pytest

from routeauth.core.guard.audit import AccessDenialLogger
from routeauth.core.guard.machine import RouteGuard
from routeauth.core.guard.session import SessionStore
from routeauth.core.rbac.actor import Actor
from routeauth.core.routes.authorizer import RouteAuthorizer
from routeauth.core.routes.registry import RouteConfigRegistry, DEFAULT_ROUTE_CONFIGS


class Recorder:
    """Callable collaborator that records every call."""

    def __init__(self):
        self.calls = []

    def __call__(self, value):
        self.calls.append(value)


@pytest.fixture
def registry():
    """Registry built from the built-in route table."""
    return RouteConfigRegistry(DEFAULT_ROUTE_CONFIGS)


@pytest.fixture
def authorizer(registry):
    return RouteAuthorizer(registry)


@pytest.fixture
def navigator():
    return Recorder()


@pytest.fixture
def notifier():
    return Recorder()


@pytest.fixture
def denial_log():
    return AccessDenialLogger()


@pytest.fixture
def guard(authorizer, denial_log, navigator, notifier):
    """Route guard wired to recording collaborators."""
    return RouteGuard(
        authorizer,
        denial_log=denial_log,
        navigator=navigator,
        notifier=notifier,
    )


@pytest.fixture
def session(authorizer):
    return SessionStore(authorizer=authorizer)


@pytest.fixture
def admin():
    return Actor.create("admin-1", roles=["Admin"])


@pytest.fixture
def user():
    return Actor.create(
        "user-1",
        roles=["User"],
        grants={"User": ["file:read", "file:create", "folder:read"]},
    )


@pytest.fixture
def sale():
    return Actor.create("sale-1", roles=["Sale"], grants={"Sale": ["plan:read"]})


@pytest.fixture
def sample_user_payload():
    """User document as returned by the session backend."""
    return {
        "id": "5f0c6d1e-0000-4000-8000-000000000001",
        "email": "jane@example.com",
        "userRoles": [
            {
                "role": {
                    "name": "User",
                    "rolePermissions": [
                        {"permission": {"action": "read", "resource": "file"}},
                        {"permission": {"action": "delete", "resource": "file"}},
                    ],
                }
            },
            {
                "role": {
                    "name": "Sale",
                    "rolePermissions": [
                        {"permission": {"action": "export", "resource": "payment"}},
                    ],
                }
            },
            {"role": None},
        ],
    }
