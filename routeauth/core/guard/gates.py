"""Per-page requirement checks and conditional content gates.

These cover pages and fragments that declare their own requirements
instead of relying on the route table.
"""

from typing import Iterable, Optional, TypeVar, Union

from ..rbac.actor import Actor
from ..rbac.checker import PermissionEvaluator, get_evaluator
from ..rbac.permissions import Action, Permission, Resource
from ..routes.redirect import DEFAULT_LOGIN_PATH, DefaultRedirectResolver
from .audit import message_for
from .states import DenialReason, GuardDecision

T = TypeVar("T")
F = TypeVar("F")


def check_requirements(
    actor: Optional[Actor],
    required_roles: Optional[Iterable[str]] = None,
    required_permissions: Optional[Iterable[Union[Permission, str]]] = None,
    fallback_path: Optional[str] = None,
    *,
    path: str = "",
    evaluator: Optional[PermissionEvaluator] = None,
    resolver: Optional[DefaultRedirectResolver] = None,
    login_path: str = DEFAULT_LOGIN_PATH,
) -> GuardDecision:
    """
    Check a page's own role and permission requirements.

    Roles need any one match, permissions need all to be held. On failure
    the actor is sent to fallback_path, or to its default landing path.

    Args:
        actor: Current actor, None when there is no session
        required_roles: Roles of which at least one must be held
        required_permissions: Permissions that must all be held
        fallback_path: Redirect target on insufficient permission
        path: Path of the page being checked (reported in the decision)

    Returns:
        GuardDecision (AUTHORIZED or DENIED); no side effects are run
    """
    evaluator = evaluator or get_evaluator()
    resolver = resolver or DefaultRedirectResolver(login_path=login_path)

    if actor is None:
        reason = DenialReason.INVALID_SESSION
        return GuardDecision.denied(path, reason, login_path, message_for(reason))

    roles = list(required_roles or [])
    permissions = list(required_permissions or [])

    allowed = True
    if roles and not evaluator.has_any_role(actor, roles):
        allowed = False
    elif permissions and not evaluator.has_all_permissions(actor, permissions):
        allowed = False

    if allowed:
        return GuardDecision.authorized(path)

    reason = DenialReason.INSUFFICIENT_PERMISSION
    target = fallback_path or resolver.get_default_redirect_path(actor.roles)
    return GuardDecision.denied(path, reason, target, message_for(reason))


def permission_gate(
    actor: Optional[Actor],
    action: Union[Action, str],
    resource: Union[Resource, str],
    content: T,
    fallback: F = None,
    *,
    evaluator: Optional[PermissionEvaluator] = None,
) -> Union[T, F]:
    """Return content when the actor holds (action, resource), else fallback."""
    evaluator = evaluator or get_evaluator()
    if not evaluator.can(actor, action, resource):
        return fallback
    return content


def role_gate(
    actor: Optional[Actor],
    role: str,
    content: T,
    fallback: F = None,
    *,
    evaluator: Optional[PermissionEvaluator] = None,
) -> Union[T, F]:
    """Return content when the actor holds role, else fallback."""
    evaluator = evaluator or get_evaluator()
    if not evaluator.has_role(actor, role):
        return fallback
    return content
