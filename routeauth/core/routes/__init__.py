"""Route table, authorization and default redirects for routeauth."""

from .paths import ROOT_PATH, normalize_path, ancestor_paths
from .registry import (
    RouteConfig,
    RouteConfigError,
    RouteConfigRegistry,
    DEFAULT_ROUTE_CONFIGS,
    get_default_registry,
)
from .authorizer import (
    RouteAuthorizer,
    get_authorizer,
    can_access_route,
    get_accessible_routes,
)
from .redirect import (
    RedirectRule,
    DefaultRedirectResolver,
    DEFAULT_REDIRECT_RULES,
    get_default_redirect_path,
    get_redirect_path_for_reason,
)

__all__ = [
    "ROOT_PATH",
    "normalize_path",
    "ancestor_paths",
    "RouteConfig",
    "RouteConfigError",
    "RouteConfigRegistry",
    "DEFAULT_ROUTE_CONFIGS",
    "get_default_registry",
    "RouteAuthorizer",
    "get_authorizer",
    "can_access_route",
    "get_accessible_routes",
    "RedirectRule",
    "DefaultRedirectResolver",
    "DEFAULT_REDIRECT_RULES",
    "get_default_redirect_path",
    "get_redirect_path_for_reason",
]
