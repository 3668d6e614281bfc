"""Audit trail of denied navigations.

Keeps the most recent denial events in memory for debugging surfaces and
maps denial reasons to the messages shown to the user. The trail is
observational only; authorization never reads it.
"""

from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Deque, Dict, Iterable, List, Optional, Tuple

from ...common.logger import get_logger
from .states import DenialReason

logger = get_logger("route_guard")

DEFAULT_CAPACITY = 100

DENIAL_MESSAGES: Dict[DenialReason, str] = {
    DenialReason.NO_ROLE: "You do not have a role assigned. Please contact administrator.",
    DenialReason.INSUFFICIENT_PERMISSION: "You do not have permission to access this page.",
    DenialReason.SESSION_EXPIRED: "Your session has expired. Please log in again.",
    DenialReason.INVALID_SESSION: "Your session is invalid. Please log in again.",
    DenialReason.UNKNOWN: "Access denied. Please try again or contact support.",
}


@dataclass(frozen=True)
class DenialEvent:
    """One denied navigation."""

    timestamp: datetime
    reason: DenialReason
    attempted_path: str
    redirected_to: str
    actor_roles: Optional[Tuple[str, ...]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "reason": self.reason.value,
            "attempted_path": self.attempted_path,
            "redirected_to": self.redirected_to,
            "actor_roles": list(self.actor_roles) if self.actor_roles is not None else None,
        }


def message_for(reason: Any) -> str:
    """Get the user-facing message for a denial reason.

    Unrecognized reasons get the generic message.
    """
    try:
        return DENIAL_MESSAGES[DenialReason(reason)]
    except (ValueError, KeyError, TypeError):
        return DENIAL_MESSAGES[DenialReason.UNKNOWN]


class AccessDenialLogger:
    """Capacity-capped, append-only log of denial events.

    When full, the oldest event is evicted first.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError(f"Denial log capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._events: Deque[DenialEvent] = deque(maxlen=capacity)

    def log(
        self,
        reason: DenialReason,
        attempted_path: str,
        redirected_to: str,
        actor_roles: Optional[Iterable[str]] = None,
    ) -> DenialEvent:
        """
        Record a denied navigation.

        Args:
            reason: Why the navigation was denied
            attempted_path: Path the actor tried to reach
            redirected_to: Path the actor was sent to
            actor_roles: Snapshot of the actor's roles, if any

        Returns:
            The recorded event
        """
        try:
            reason = DenialReason(reason)
        except (ValueError, TypeError):
            reason = DenialReason.UNKNOWN

        event = DenialEvent(
            timestamp=datetime.now(timezone.utc),
            reason=reason,
            attempted_path=attempted_path,
            redirected_to=redirected_to,
            actor_roles=tuple(sorted(actor_roles)) if actor_roles is not None else None,
        )
        self._events.append(event)

        logger.warning(
            f"[RBAC] Unauthorized access: reason={event.reason.value} "
            f"path={attempted_path} redirect={redirected_to} "
            f"roles={list(event.actor_roles) if event.actor_roles is not None else None}"
        )
        return event

    def events(self) -> List[DenialEvent]:
        """Get all recorded events, oldest first."""
        return list(self._events)

    def clear(self) -> None:
        """Drop all recorded events."""
        self._events.clear()

    def message_for(self, reason: Any) -> str:
        return message_for(reason)

    def __len__(self) -> int:
        return len(self._events)
