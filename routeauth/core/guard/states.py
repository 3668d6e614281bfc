"""Route guard states and denial reasons.

State Machine Diagram:

    ┌──────────┐
    │ CHECKING │ ← Entered on every navigation or session change
    └────┬─────┘
         │
         ├─────────────────────┐
         │                     │
    ┌────▼───────┐       ┌─────▼────┐
    │ AUTHORIZED │       │  DENIED  │ → log, notify, redirect
    └────────────┘       └──────────┘

CHECKING is also reported while the session is still loading.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Set, Tuple


class GuardState(str, Enum):
    """States of a single navigation check."""

    CHECKING = "checking"
    AUTHORIZED = "authorized"
    DENIED = "denied"


class DenialReason(str, Enum):
    """Why a navigation was denied."""

    NO_ROLE = "NO_ROLE"
    INSUFFICIENT_PERMISSION = "INSUFFICIENT_PERMISSION"
    SESSION_EXPIRED = "SESSION_EXPIRED"
    INVALID_SESSION = "INVALID_SESSION"
    UNKNOWN = "UNKNOWN"


# Terminal states for one navigation
TERMINAL_STATES: Set[GuardState] = {
    GuardState.AUTHORIZED,
    GuardState.DENIED,
}

# Reasons that send the actor back to the login page
SESSION_REASONS: Tuple[DenialReason, ...] = (
    DenialReason.INVALID_SESSION,
    DenialReason.SESSION_EXPIRED,
    DenialReason.NO_ROLE,
)


@dataclass(frozen=True)
class GuardDecision:
    """Outcome of evaluating one navigation."""

    state: GuardState
    path: str
    reason: Optional[DenialReason] = None
    target: Optional[str] = None
    message: Optional[str] = None

    @property
    def is_authorized(self) -> bool:
        return self.state == GuardState.AUTHORIZED

    @property
    def is_denied(self) -> bool:
        return self.state == GuardState.DENIED

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    @classmethod
    def checking(cls, path: str) -> "GuardDecision":
        return cls(GuardState.CHECKING, path)

    @classmethod
    def authorized(cls, path: str) -> "GuardDecision":
        return cls(GuardState.AUTHORIZED, path)

    @classmethod
    def denied(cls, path: str, reason: DenialReason, target: str, message: str) -> "GuardDecision":
        return cls(GuardState.DENIED, path, reason=reason, target=target, message=message)
