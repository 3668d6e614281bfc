"""routeauth: hierarchical route and permission authorization.

Decides whether an actor may reach a route, where to send it by default,
and which routes it can reach at all.
"""

from .core.rbac import Action, Actor, Permission, PermissionEvaluator, Resource
from .core.routes import (
    DefaultRedirectResolver,
    RouteAuthorizer,
    RouteConfig,
    RouteConfigError,
    RouteConfigRegistry,
    can_access_route,
    get_accessible_routes,
    get_default_redirect_path,
)
from .core.guard import (
    AccessDenialLogger,
    DenialReason,
    GuardDecision,
    GuardState,
    RouteGuard,
    SessionStore,
)

__version__ = "0.1.0"

__all__ = [
    "Action",
    "Actor",
    "Permission",
    "PermissionEvaluator",
    "Resource",
    "DefaultRedirectResolver",
    "RouteAuthorizer",
    "RouteConfig",
    "RouteConfigError",
    "RouteConfigRegistry",
    "can_access_route",
    "get_accessible_routes",
    "get_default_redirect_path",
    "AccessDenialLogger",
    "DenialReason",
    "GuardDecision",
    "GuardState",
    "RouteGuard",
    "SessionStore",
]
