"""CLI interface for routeauth.

Commands:
    validate <config.yaml>   Validate a route table declaration
    check <path> [role ...]  Check whether the roles may reach path
    routes [role ...]        List routes reachable with the roles
    redirect [role ...]      Print the default landing path for the roles
"""

import sys

import yaml

from .common.config import build_route_table, load_registry
from .common.logger import configure_logging
from .core.config import get_settings
from .core.routes.authorizer import RouteAuthorizer
from .core.routes.registry import RouteConfigError

USAGE = (
    "Usage: python -m routeauth validate <config.yaml>\n"
    "       python -m routeauth check <path> [role ...]\n"
    "       python -m routeauth routes [role ...]\n"
    "       python -m routeauth redirect [role ...]"
)


def _validate(args: list[str]) -> int:
    if len(args) != 1:
        print(USAGE, file=sys.stderr)
        return 2

    try:
        registry = load_registry(args[0])
    except (FileNotFoundError, TypeError, RouteConfigError, yaml.YAMLError) as e:
        print(f"Invalid route table: {e}", file=sys.stderr)
        return 1

    print(f"OK: {len(registry)} routes")
    return 0


def main(argv=None) -> int:
    """Main entry point for routeauth CLI."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print(USAGE, file=sys.stderr)
        return 2

    settings = get_settings()
    configure_logging(settings)

    command, rest = args[0], args[1:]

    if command == "validate":
        return _validate(rest)

    try:
        registry, resolver = build_route_table(settings)
    except (FileNotFoundError, TypeError, RouteConfigError, yaml.YAMLError) as e:
        print(f"Invalid route table: {e}", file=sys.stderr)
        return 1
    authorizer = RouteAuthorizer(registry)

    if command == "check":
        if not rest:
            print(USAGE, file=sys.stderr)
            return 2
        allowed = authorizer.can_access(rest[0], rest[1:])
        print("allowed" if allowed else "denied")
        return 0 if allowed else 1

    if command == "routes":
        for path in authorizer.get_accessible_routes(rest):
            print(path)
        return 0

    if command == "redirect":
        print(resolver.get_default_redirect_path(rest))
        return 0

    print(f"Unknown command: {command}", file=sys.stderr)
    print(USAGE, file=sys.stderr)
    return 2


if __name__ == "__main__":
    sys.exit(main())
