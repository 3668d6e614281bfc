"""Static route table for routeauth.

Maps normalized route paths to their access requirements. The table is
built once from a declaration (the built-in one below or a YAML file)
and is read-only afterwards.
"""

from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from ..rbac.permissions import Permission, coerce_permission
from ..rbac.roles import ADMIN_ONLY, ALL_ROLES, STORAGE_ROLES
from ...common.logger import get_logger
from .paths import ROOT_PATH, normalize_path

logger = get_logger("route_registry")


class RouteConfigError(ValueError):
    """Raised when a route table declaration is invalid."""


class RouteConfig(BaseModel):
    """Access requirements for one route path.

    An empty required_roles tuple makes the route public. When
    required_permissions is set, every listed permission is needed on top
    of the role match.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    path: str
    required_roles: Tuple[str, ...] = ()
    required_permissions: Optional[Tuple[Permission, ...]] = None
    redirect_to: Optional[str] = None

    @field_validator("path")
    @classmethod
    def _normalize(cls, value: str) -> str:
        normalized = normalize_path(value)
        if not normalized:
            raise ValueError("route path must not be empty")
        return normalized

    @field_validator("required_roles", mode="before")
    @classmethod
    def _roles(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,)
        return value

    @field_validator("required_permissions", mode="before")
    @classmethod
    def _permissions(cls, value: Any) -> Any:
        if value is None:
            return None
        return tuple(coerce_permission(p) for p in value)

    @field_validator("redirect_to")
    @classmethod
    def _redirect(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return normalize_path(value) or None

    @property
    def is_public(self) -> bool:
        return not self.required_roles


RouteDeclaration = Union[RouteConfig, Mapping[str, Any]]


class RouteConfigRegistry:
    """Read-only lookup table of route configurations.

    Keeps declaration order, which is the order used when enumerating
    accessible routes.
    """

    def __init__(self, routes: Iterable[RouteDeclaration] = ()):
        """
        Build the registry, validating every declaration once.

        Args:
            routes: RouteConfig instances or mappings with the same fields

        Raises:
            RouteConfigError: If an entry is invalid or a path is declared twice
        """
        self._routes: Dict[str, RouteConfig] = {}

        for declaration in routes:
            config = _to_route_config(declaration)
            if config.path in self._routes:
                raise RouteConfigError(f"Duplicate route path: {config.path}")
            self._routes[config.path] = config

        logger.debug(f"Route registry built with {len(self._routes)} routes")

    def get(self, path: Any) -> Optional[RouteConfig]:
        """Get the exact configuration for a path.

        Args:
            path: Route path, normalized before lookup

        Returns:
            RouteConfig or None if the path is not configured
        """
        normalized = normalize_path(path)
        if not normalized:
            return None
        return self._routes.get(normalized)

    def all(self) -> List[RouteConfig]:
        """All configurations in declaration order."""
        return list(self._routes.values())

    def paths(self) -> List[str]:
        """All configured paths in declaration order."""
        return list(self._routes.keys())

    def __contains__(self, path: Any) -> bool:
        return self.get(path) is not None

    def __iter__(self) -> Iterator[RouteConfig]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._routes)


def _to_route_config(declaration: RouteDeclaration) -> RouteConfig:
    if isinstance(declaration, RouteConfig):
        return declaration
    if not isinstance(declaration, Mapping):
        raise RouteConfigError(
            f"Route declaration must be a mapping, got {type(declaration).__name__}"
        )
    try:
        return RouteConfig(**declaration)
    except ValidationError as e:
        path = declaration.get("path", "<missing>")
        raise RouteConfigError(f"Invalid route {path}: {e}") from e
    except TypeError as e:
        raise RouteConfigError(f"Invalid route declaration: {e}") from e


def _route(path: str, roles: Tuple[str, ...] = (), redirect_to: Optional[str] = None) -> RouteConfig:
    return RouteConfig(path=path, required_roles=roles, redirect_to=redirect_to)


# Built-in deployment table
DEFAULT_ROUTE_CONFIGS: List[RouteConfig] = [
    # Root only redirects; it never takes part in inheritance
    _route(ROOT_PATH),
    _route("/home", ALL_ROLES),

    # Administration
    _route("/users", ADMIN_ONLY, redirect_to="/home"),
    _route("/roles", ADMIN_ONLY, redirect_to="/home"),
    _route("/permissions", ADMIN_ONLY, redirect_to="/home"),

    # Plans and payments
    _route("/plans", ALL_ROLES, redirect_to="/home"),
    _route("/payment", ALL_ROLES, redirect_to="/home"),
    _route("/payment/success", ALL_ROLES, redirect_to="/home"),
    _route("/payment/error", ALL_ROLES, redirect_to="/home"),
    _route("/payment/cancel", ALL_ROLES, redirect_to="/home"),
    _route("/payment/result", ALL_ROLES, redirect_to="/home"),
    _route("/payment/checkout", ALL_ROLES, redirect_to="/home"),
    _route("/payment/demo", ALL_ROLES, redirect_to="/home"),
    _route("/payment/history", ALL_ROLES, redirect_to="/home"),

    _route("/my-profile", ALL_ROLES),

    # File storage
    _route("/storage", STORAGE_ROLES, redirect_to="/home"),
    _route("/trash", STORAGE_ROLES, redirect_to="/home"),
    _route("/app-config", ADMIN_ONLY, redirect_to="/home"),
    _route("/share-with-me", STORAGE_ROLES),
]


_default_registry: Optional[RouteConfigRegistry] = None


def get_default_registry() -> RouteConfigRegistry:
    """Get the registry built from the built-in route table.

    Returns:
        Shared RouteConfigRegistry instance
    """
    global _default_registry
    if _default_registry is None:
        _default_registry = RouteConfigRegistry(DEFAULT_ROUTE_CONFIGS)
    return _default_registry
