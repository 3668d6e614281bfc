"""Default landing paths.

A small priority table, evaluated top to bottom, first match wins:

    no roles      -> /login
    Admin         -> /home
    Sale          -> /plans
    anything else -> /home

The table is a product decision kept apart from the route table.
"""

from typing import Iterable, List, NamedTuple, Optional, Sequence

from ..rbac.roles import ADMIN, SALE


class RedirectRule(NamedTuple):
    """Send actors holding role to path."""
    role: str
    path: str


DEFAULT_REDIRECT_RULES: List[RedirectRule] = [
    RedirectRule(ADMIN, "/home"),
    RedirectRule(SALE, "/plans"),
]

DEFAULT_LOGIN_PATH = "/login"
DEFAULT_FALLBACK_PATH = "/home"


class DefaultRedirectResolver:
    """Resolves the landing path for a set of roles."""

    def __init__(
        self,
        rules: Optional[Sequence[RedirectRule]] = None,
        login_path: str = DEFAULT_LOGIN_PATH,
        fallback_path: str = DEFAULT_FALLBACK_PATH,
    ):
        """
        Initialize the resolver.

        Args:
            rules: Priority-ordered (role, path) rules
            login_path: Target when no roles are held
            fallback_path: Target when roles are held but no rule matches
        """
        self.rules = list(rules) if rules is not None else list(DEFAULT_REDIRECT_RULES)
        self.login_path = login_path
        self.fallback_path = fallback_path

    def get_default_redirect_path(self, actor_roles: Optional[Iterable[str]] = None) -> str:
        """Get the landing path for the roles, independent of their order."""
        roles = frozenset(actor_roles or ())
        if not roles:
            return self.login_path

        for rule in self.rules:
            if rule.role in roles:
                return rule.path

        return self.fallback_path

    def get_redirect_path_for_reason(
        self,
        reason,
        actor_roles: Optional[Iterable[str]] = None,
    ) -> str:
        """Get the redirect target for a denial reason.

        Session problems go to the login page, insufficient permission goes
        to the default landing path, anything else to the fallback path.
        """
        from ..guard.states import SESSION_REASONS, DenialReason

        if reason in SESSION_REASONS:
            return self.login_path

        if reason == DenialReason.INSUFFICIENT_PERMISSION:
            return self.get_default_redirect_path(actor_roles)

        return self.fallback_path


_resolver = DefaultRedirectResolver()


def get_default_redirect_path(actor_roles: Optional[Iterable[str]] = None) -> str:
    """Get the landing path for the roles using the default table."""
    return _resolver.get_default_redirect_path(actor_roles)


def get_redirect_path_for_reason(reason, actor_roles: Optional[Iterable[str]] = None) -> str:
    """Get the redirect target for a denial reason using the default table."""
    return _resolver.get_redirect_path_for_reason(reason, actor_roles)
