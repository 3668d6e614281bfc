"""Permission model for routeauth RBAC.

A permission is an (action, resource) pair. Actions come from a closed
enumeration; resources are plain domain strings.

Permission string format: "resource:action"
Examples:
  - file:read
  - user:manage
  - payment:export
"""

from enum import Enum
from typing import NamedTuple, Optional, Union


class Action(str, Enum):
    """Actions that can be granted on a resource."""

    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    APPROVE = "approve"
    EXPORT = "export"
    MANAGE = "manage"


class Resource(str, Enum):
    """Resources named by the application.

    Grants and queries use plain strings, so this enum is a convenience
    and not an exhaustive list.
    """

    FILE = "file"
    FOLDER = "folder"
    USER = "user"
    ROLE = "role"
    PERMISSION = "permission"
    PLAN = "plan"
    PAYMENT = "payment"
    STORAGE = "storage"
    APP_CONFIG = "app_config"
    SHARE = "share"


class Permission(NamedTuple):
    """A permission is a combination of action and resource."""
    action: Action
    resource: str

    def __str__(self) -> str:
        return f"{self.resource}:{self.action.value}"

    @classmethod
    def of(cls, action: Union[Action, str], resource: Union[Resource, str]) -> "Permission":
        """Build a permission from loosely typed parts.

        Raises:
            ValueError: If the action is not a known Action
        """
        resource_str = resource.value if isinstance(resource, Resource) else str(resource)
        return cls(Action(action), resource_str)

    @classmethod
    def from_string(cls, perm_str: str) -> "Permission":
        """Parse a permission string like 'file:read'."""
        parts = perm_str.split(":")
        if len(parts) != 2 or not parts[0]:
            raise ValueError(f"Invalid permission format: {perm_str}")
        return cls(Action(parts[1]), parts[0])


def coerce_permission(value) -> Permission:
    """Turn a Permission, "resource:action" string or mapping into a Permission.

    Raises:
        ValueError: If the value cannot be interpreted as a permission
    """
    if isinstance(value, Permission):
        return value
    if isinstance(value, str):
        return Permission.from_string(value)
    if isinstance(value, dict):
        try:
            return Permission.of(value["action"], value["resource"])
        except KeyError as e:
            raise ValueError(f"Permission mapping missing key: {e}") from e
    if isinstance(value, (tuple, list)) and len(value) == 2:
        return Permission.of(value[0], value[1])
    raise ValueError(f"Invalid permission: {value!r}")


def parse_action(action: Union[Action, str]) -> Optional[Action]:
    """Return the Action for a value, or None when it is not a known action."""
    if isinstance(action, Action):
        return action
    try:
        return Action(action)
    except ValueError:
        return None
