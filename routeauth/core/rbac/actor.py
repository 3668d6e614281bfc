"""The authenticated subject whose roles and grants are evaluated."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Mapping, Optional

from .permissions import Permission, coerce_permission
from ...common.logger import get_logger

logger = get_logger("session_store")


@dataclass(frozen=True)
class Actor:
    """An authenticated actor.

    Attributes:
        id: Actor identifier (user id)
        roles: Role names held by the actor
        grants: Permissions carried by each held role
        expires_at: Session expiry; None means the session does not expire
    """

    id: str
    roles: frozenset = field(default_factory=frozenset)
    grants: Dict[str, tuple] = field(default_factory=dict)
    expires_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        actor_id: str,
        roles: Iterable[str] = (),
        grants: Optional[Mapping[str, Iterable[Any]]] = None,
        expires_at: Optional[datetime] = None,
    ) -> "Actor":
        """Build an actor, coercing grant entries into Permission values."""
        normalized_grants = {
            role: tuple(coerce_permission(p) for p in perms)
            for role, perms in (grants or {}).items()
        }
        return cls(
            id=str(actor_id),
            roles=frozenset(r for r in roles if r),
            grants=normalized_grants,
            expires_at=expires_at,
        )

    @classmethod
    def from_user_payload(cls, payload: Mapping[str, Any]) -> "Actor":
        """Build an actor from the user document returned by the session backend.

        Expected shape (camelCase or snake_case keys):
            {"id": ..., "userRoles": [{"role": {"name": "Admin",
              "rolePermissions": [{"permission": {"action": "read",
                                                  "resource": "file"}}]}}]}

        Role entries without a name and permissions with an unknown action
        are skipped.
        """
        roles = []
        grants: Dict[str, list] = {}
        user_roles = payload.get("userRoles", payload.get("user_roles")) or []

        for user_role in user_roles:
            role = (user_role or {}).get("role") or {}
            name = role.get("name")
            if not name:
                continue
            roles.append(name)

            role_permissions = role.get("rolePermissions", role.get("role_permissions")) or []
            perms = grants.setdefault(name, [])
            for role_permission in role_permissions:
                permission = (role_permission or {}).get("permission")
                if not permission:
                    continue
                try:
                    perms.append(coerce_permission(permission))
                except ValueError as e:
                    logger.debug(f"Skipping grant for role {name}: {e}")

        expires_at = payload.get("expiresAt", payload.get("expires_at"))
        if isinstance(expires_at, str):
            expires_at = datetime.fromisoformat(expires_at)

        return cls.create(
            payload.get("id", ""),
            roles=roles,
            grants=grants,
            expires_at=expires_at,
        )

    @property
    def role_list(self) -> list[str]:
        """Roles as a sorted list (stable snapshot for logs and persistence)."""
        return sorted(self.roles)

    def permissions(self) -> set:
        """All permissions reachable through the actor's roles."""
        reachable: set[Permission] = set()
        for role in self.roles:
            reachable.update(self.grants.get(role, ()))
        return reachable

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Check if the session carrying this actor has expired."""
        if self.expires_at is None:
            return False
        now = now or datetime.now(timezone.utc)
        expires_at = self.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return expires_at <= now

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "roles": self.role_list,
            "grants": {
                role: [str(p) for p in perms] for role, perms in self.grants.items()
            },
            "expires_at": self.expires_at.isoformat() if self.expires_at else None,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Actor":
        """Inverse of to_dict."""
        expires_at = data.get("expires_at")
        return cls.create(
            data.get("id", ""),
            roles=data.get("roles", []),
            grants=data.get("grants", {}),
            expires_at=datetime.fromisoformat(expires_at) if expires_at else None,
        )
