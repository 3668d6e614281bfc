"""Configuration management for routeauth.

Handles loading and validation of YAML route table declarations.

Example declaration:

    routes:
      - path: /home
        required_roles: [Admin, User, Sale]
      - path: /users
        required_roles: [Admin]
        required_permissions: ["user:read"]
        redirect_to: /home
    default_redirects:
      - {role: Admin, path: /home}
      - {role: Sale, path: /plans}
    fallback_redirect: /home
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from ..core.routes.redirect import (
    DEFAULT_FALLBACK_PATH,
    DEFAULT_LOGIN_PATH,
    DefaultRedirectResolver,
    RedirectRule,
)
from ..core.routes.registry import (
    RouteConfig,
    RouteConfigError,
    RouteConfigRegistry,
    get_default_registry,
)


def parse_route_configs(config_dict: Dict[str, Any]) -> List[RouteConfig]:
    """Parse the routes list of a configuration dictionary.

    Args:
        config_dict: Full configuration dictionary

    Returns:
        List of RouteConfig instances in declaration order

    Raises:
        RouteConfigError: If the routes section is malformed
    """
    routes = config_dict.get("routes", [])
    if routes is None:
        return []
    if not isinstance(routes, list):
        raise RouteConfigError(
            f"'routes' must be a list, got {type(routes).__name__}"
        )

    # The registry validates each entry and rejects duplicates
    return RouteConfigRegistry(routes).all()


def parse_redirect_rules(config_dict: Dict[str, Any]) -> List[RedirectRule]:
    """Parse the default_redirects list of a configuration dictionary.

    Args:
        config_dict: Full configuration dictionary

    Returns:
        List of RedirectRule in priority order (empty when not declared)
    """
    entries = config_dict.get("default_redirects")
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise RouteConfigError(
            f"'default_redirects' must be a list, got {type(entries).__name__}"
        )

    rules = []
    for entry in entries:
        if not isinstance(entry, dict) or "role" not in entry or "path" not in entry:
            raise RouteConfigError(f"Invalid default redirect entry: {entry!r}")
        rules.append(RedirectRule(str(entry["role"]), str(entry["path"])))
    return rules


def build_resolver(
    config_dict: Dict[str, Any],
    login_path: str = DEFAULT_LOGIN_PATH,
) -> DefaultRedirectResolver:
    """Build a redirect resolver from a configuration dictionary.

    The built-in rules apply only when default_redirects is absent or null;
    an explicit empty list sends every non-empty role set to the fallback
    path.

    Raises:
        RouteConfigError: If a redirect section is malformed
    """
    rules = None
    if config_dict.get("default_redirects") is not None:
        rules = parse_redirect_rules(config_dict)

    fallback_path = config_dict.get("fallback_redirect") or DEFAULT_FALLBACK_PATH
    if not isinstance(fallback_path, str):
        raise RouteConfigError(
            f"'fallback_redirect' must be a path, got {type(fallback_path).__name__}"
        )

    return DefaultRedirectResolver(
        rules=rules,
        login_path=login_path,
        fallback_path=fallback_path,
    )


def load_config(config_path: str) -> Dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid YAML
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with config_file.open("r") as f:
        config = yaml.safe_load(f)

    if config is None:
        config = {}

    if not isinstance(config, dict):
        raise TypeError(
            f"Configuration root must be a mapping, got {type(config).__name__}"
        )

    config = _expand_env_vars(config)

    return config


def _expand_env_vars(obj: Any) -> Any:
    """Recursively expand environment variables in configuration.

    Args:
        obj: Configuration object (dict, list, str, etc.)

    Returns:
        Configuration with expanded environment variables
    """
    if isinstance(obj, dict):
        return {key: _expand_env_vars(value) for key, value in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    elif isinstance(obj, str):
        return os.path.expandvars(obj)
    else:
        return obj


def load_registry(config_path: str) -> RouteConfigRegistry:
    """Load a YAML route table into a registry.

    Raises:
        FileNotFoundError: If config file doesn't exist
        RouteConfigError: If the route table is invalid
    """
    return RouteConfigRegistry(parse_route_configs(load_config(config_path)))


def build_route_table(
    settings: Optional[Any] = None,
) -> Tuple[RouteConfigRegistry, DefaultRedirectResolver]:
    """Build the registry and redirect resolver for the given settings.

    Uses the YAML file named by settings.route_config_path when set,
    otherwise the built-in route table and redirect rules.

    Returns:
        Tuple of (registry, resolver)
    """
    path = getattr(settings, "route_config_path", None)
    login_path = getattr(settings, "login_path", DEFAULT_LOGIN_PATH)

    if not path:
        return get_default_registry(), DefaultRedirectResolver(login_path=login_path)

    config_dict = load_config(path)
    registry = RouteConfigRegistry(parse_route_configs(config_dict))
    return registry, build_resolver(config_dict, login_path=login_path)
