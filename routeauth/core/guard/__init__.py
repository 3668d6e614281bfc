"""Route guard module for routeauth.

Implements the navigation guard state machine, the denial audit trail
and the session store adapter.
"""

from .states import GuardState, DenialReason, GuardDecision, TERMINAL_STATES
from .audit import AccessDenialLogger, DenialEvent, DENIAL_MESSAGES, message_for
from .session import SessionStore
from .machine import RouteGuard, Navigator, Notifier, DEFAULT_PUBLIC_ROUTES
from .gates import check_requirements, permission_gate, role_gate

__all__ = [
    "GuardState",
    "DenialReason",
    "GuardDecision",
    "TERMINAL_STATES",
    "AccessDenialLogger",
    "DenialEvent",
    "DENIAL_MESSAGES",
    "message_for",
    "SessionStore",
    "RouteGuard",
    "Navigator",
    "Notifier",
    "DEFAULT_PUBLIC_ROUTES",
    "check_requirements",
    "permission_gate",
    "role_gate",
]
