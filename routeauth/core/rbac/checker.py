"""Permission checking utilities for routeauth.

Answers role and permission questions against an actor's role/grant graph.
Matching is exact: no wildcards, no role hierarchy, no action hierarchy.
"""

from typing import Iterable, Optional, Union

from .actor import Actor
from .permissions import Action, Permission, Resource, coerce_permission, parse_action


class PermissionEvaluator:
    """Checks whether an actor holds roles and permissions."""

    def has_role(self, actor: Optional[Actor], role: str) -> bool:
        """Check if the actor holds a role. False when there is no actor."""
        if actor is None:
            return False
        return role in actor.roles

    def has_any_role(self, actor: Optional[Actor], roles: Iterable[str]) -> bool:
        """Check if the actor holds at least one of the given roles."""
        if actor is None:
            return False
        return any(role in actor.roles for role in roles)

    def has_permission(
        self,
        actor: Optional[Actor],
        action: Union[Action, str],
        resource: Union[Resource, str],
    ) -> bool:
        """
        Check if any role held by the actor grants (action, resource).

        Args:
            actor: Actor to check, may be None
            action: Action enum member or its string value
            resource: Resource enum member or plain resource string

        Returns:
            True if an exactly matching grant exists
        """
        if actor is None:
            return False

        parsed = parse_action(action)
        if parsed is None:
            return False

        resource_str = resource.value if isinstance(resource, Resource) else resource
        wanted = Permission(parsed, resource_str)

        return any(
            wanted in actor.grants.get(role, ())
            for role in actor.roles
        )

    def has_all_permissions(
        self,
        actor: Optional[Actor],
        permissions: Iterable[Union[Permission, str]],
    ) -> bool:
        """Check if the actor holds every listed permission."""
        if actor is None:
            return False
        for perm in permissions:
            perm = coerce_permission(perm)
            if not self.has_permission(actor, perm.action, perm.resource):
                return False
        return True

    # Shorthands for the common actions

    def can(self, actor: Optional[Actor], action: Union[Action, str], resource: Union[Resource, str]) -> bool:
        return self.has_permission(actor, action, resource)

    def can_read(self, actor: Optional[Actor], resource: Union[Resource, str]) -> bool:
        return self.has_permission(actor, Action.READ, resource)

    def can_create(self, actor: Optional[Actor], resource: Union[Resource, str]) -> bool:
        return self.has_permission(actor, Action.CREATE, resource)

    def can_update(self, actor: Optional[Actor], resource: Union[Resource, str]) -> bool:
        return self.has_permission(actor, Action.UPDATE, resource)

    def can_delete(self, actor: Optional[Actor], resource: Union[Resource, str]) -> bool:
        return self.has_permission(actor, Action.DELETE, resource)

    def can_manage(self, actor: Optional[Actor], resource: Union[Resource, str]) -> bool:
        return self.has_permission(actor, Action.MANAGE, resource)


_evaluator = PermissionEvaluator()


def get_evaluator() -> PermissionEvaluator:
    """Get the shared permission evaluator."""
    return _evaluator


def has_role(actor: Optional[Actor], role: str) -> bool:
    """
    Check if an actor holds a role.

    Args:
        actor: Actor instance or None

    Returns:
        True if the role is held
    """
    return _evaluator.has_role(actor, role)


def has_permission(
    actor: Optional[Actor],
    action: Union[Action, str],
    resource: Union[Resource, str],
) -> bool:
    """
    Check if an actor holds a permission through any of its roles.

    Args:
        actor: Actor instance or None
        action: Action to check
        resource: Resource to check

    Returns:
        True if the actor has the permission
    """
    return _evaluator.has_permission(actor, action, resource)
