"""Route authorization with hierarchical inheritance.

Matching rules:
- The requested path is normalized first (see paths.normalize_path)
- An exact entry in the route table is authoritative
- Otherwise the nearest configured ancestor, by whole path segments, is
  used: /payment/success/details -> /payment/success -> /payment
- The root path never acts as an ancestor
- If neither exists, access is denied
"""

from typing import Iterable, List, Optional

from ..rbac.actor import Actor
from ..rbac.checker import PermissionEvaluator, get_evaluator
from ...common.logger import get_logger
from .paths import ROOT_PATH, ancestor_paths, normalize_path
from .registry import RouteConfig, RouteConfigRegistry, get_default_registry

logger = get_logger("route_authorizer")


class RouteAuthorizer:
    """Decides whether a set of roles may reach a route."""

    def __init__(
        self,
        registry: Optional[RouteConfigRegistry] = None,
        evaluator: Optional[PermissionEvaluator] = None,
    ):
        """
        Initialize the authorizer.

        Args:
            registry: Route table; the built-in table when omitted
            evaluator: Permission evaluator for routes with required permissions
        """
        self.registry = registry if registry is not None else get_default_registry()
        self.evaluator = evaluator or get_evaluator()

    def resolve(self, path) -> Optional[RouteConfig]:
        """Find the configuration that governs a path.

        Returns:
            The exact configuration, else the nearest configured ancestor,
            else None
        """
        normalized = normalize_path(path)
        if not normalized:
            return None

        config = self.registry.get(normalized)
        if config is not None:
            return config

        for parent in ancestor_paths(normalized):
            config = self.registry.get(parent)
            if config is not None:
                return config

        return None

    def can_access(
        self,
        path,
        actor_roles: Optional[Iterable[str]],
        actor: Optional[Actor] = None,
    ) -> bool:
        """
        Check if the given roles may reach a path.

        Args:
            path: Requested route path (normalized here)
            actor_roles: Roles held by the actor; None is treated as no roles
            actor: Actor whose grants are checked for routes that list
                required permissions

        Returns:
            True if access is granted
        """
        config = self.resolve(path)
        if config is None:
            logger.debug(f"No route configuration for {path!r}, denying")
            return False

        return self._satisfies(config, actor_roles, actor)

    def get_accessible_routes(
        self,
        actor_roles: Optional[Iterable[str]],
        actor: Optional[Actor] = None,
    ) -> List[str]:
        """List configured routes the roles may reach, in declaration order.

        The root path is deliberately left out even though it is public:
        it only redirects to a landing path and is never a destination of
        its own.
        """
        roles = frozenset(actor_roles or ())
        return [
            config.path
            for config in self.registry.all()
            if config.path != ROOT_PATH and self._satisfies(config, roles, actor)
        ]

    def _satisfies(
        self,
        config: RouteConfig,
        actor_roles: Optional[Iterable[str]],
        actor: Optional[Actor],
    ) -> bool:
        if config.is_public:
            return True

        roles = frozenset(actor_roles or ())
        if roles.isdisjoint(config.required_roles):
            return False

        if config.required_permissions is not None:
            return self.evaluator.has_all_permissions(actor, config.required_permissions)

        return True


_authorizer: Optional[RouteAuthorizer] = None


def get_authorizer() -> RouteAuthorizer:
    """Get the authorizer bound to the built-in route table."""
    global _authorizer
    if _authorizer is None:
        _authorizer = RouteAuthorizer()
    return _authorizer


def can_access_route(path, roles: Optional[Iterable[str]]) -> bool:
    """Check a path against the built-in route table."""
    return get_authorizer().can_access(path, roles)


def get_accessible_routes(roles: Optional[Iterable[str]]) -> List[str]:
    """List routes of the built-in table reachable with the given roles."""
    return get_authorizer().get_accessible_routes(roles)
