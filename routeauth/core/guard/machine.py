"""Route guard state machine.

Combines session presence, role presence and the route authorizer's
verdict into a render-or-redirect decision for each navigation, and
drives the external navigator and notifier on denial.
"""

from typing import Callable, Iterable, Optional, Protocol

from ...common.logger import get_logger
from ..rbac.actor import Actor
from ..routes.authorizer import RouteAuthorizer
from ..routes.paths import normalize_path
from ..routes.redirect import DEFAULT_LOGIN_PATH, DefaultRedirectResolver
from .audit import AccessDenialLogger, message_for
from .session import SessionStore
from .states import DenialReason, GuardDecision, GuardState

logger = get_logger("route_guard")

DEFAULT_PUBLIC_ROUTES = ("/login", "/register", "/forgot-password")


class Navigator(Protocol):
    """Performs the actual page transition."""

    def __call__(self, target: str) -> None: ...


class Notifier(Protocol):
    """Shows a message to the user."""

    def __call__(self, message: str) -> None: ...


def _log_navigation(target: str) -> None:
    logger.debug(f"No navigator configured, dropping redirect to {target}")


def _log_notification(message: str) -> None:
    logger.debug(f"No notifier configured, dropping message: {message}")


class RouteGuard:
    """
    Guard evaluated on every navigation and session change.

    Each evaluation starts in CHECKING and ends in AUTHORIZED or DENIED.
    Denials are:
    - Recorded in the access denial log
    - Reported through the notifier
    - Followed by a redirect through the navigator

    Verdicts are never cached; a redirect already dispatched for the same
    (path, target) pair is not dispatched again until the navigation
    completes.
    """

    def __init__(
        self,
        authorizer: Optional[RouteAuthorizer] = None,
        resolver: Optional[DefaultRedirectResolver] = None,
        denial_log: Optional[AccessDenialLogger] = None,
        *,
        navigator: Optional[Navigator] = None,
        notifier: Optional[Notifier] = None,
        login_path: str = DEFAULT_LOGIN_PATH,
        public_routes: Optional[Iterable[str]] = None,
    ):
        """
        Initialize the guard.

        Args:
            authorizer: Route authorizer; built-in route table when omitted
            resolver: Default redirect resolver
            denial_log: Audit trail for denied navigations
            navigator: Called with the redirect target on denial
            notifier: Called with the denial message
            login_path: Target for session and role problems
            public_routes: Paths that bypass the guard
        """
        self.authorizer = authorizer or RouteAuthorizer()
        self.resolver = resolver or DefaultRedirectResolver(login_path=login_path)
        self.denial_log = denial_log if denial_log is not None else AccessDenialLogger()
        self.navigator: Navigator = navigator or _log_navigation
        self.notifier: Notifier = notifier or _log_notification
        self.login_path = login_path
        self.public_routes = frozenset(
            normalize_path(p) for p in (public_routes if public_routes is not None else DEFAULT_PUBLIC_ROUTES)
        )

        self._state = GuardState.CHECKING
        self._last_decision: Optional[GuardDecision] = None
        self._pending_redirect: Optional[tuple[str, str]] = None
        self._current_path: Optional[str] = None
        self._session: Optional[SessionStore] = None
        self._unsubscribe: Optional[Callable[[], None]] = None

    @classmethod
    def from_settings(cls, settings=None, **kwargs) -> "RouteGuard":
        """Build a guard from application settings.

        Keyword arguments are passed through to the constructor
        (navigator, notifier, ...).
        """
        from ..config import get_settings
        from ...common.config import build_route_table

        settings = settings or get_settings()
        registry, resolver = build_route_table(settings)
        kwargs.setdefault("authorizer", RouteAuthorizer(registry))
        kwargs.setdefault("resolver", resolver)
        kwargs.setdefault("denial_log", AccessDenialLogger(settings.denial_log_capacity))
        kwargs.setdefault("login_path", settings.login_path)
        kwargs.setdefault("public_routes", settings.public_routes_list)
        return cls(**kwargs)

    @property
    def state(self) -> GuardState:
        """State reached by the most recent evaluation."""
        return self._state

    @property
    def last_decision(self) -> Optional[GuardDecision]:
        return self._last_decision

    @property
    def current_path(self) -> Optional[str]:
        return self._current_path

    def evaluate(self, path, actor: Optional[Actor], is_loading: bool = False) -> GuardDecision:
        """
        Evaluate one navigation.

        Args:
            path: Requested route path
            actor: Current actor, None when there is no session
            is_loading: True while the session is still being restored

        Returns:
            The decision; denial side effects have already run
        """
        self._state = GuardState.CHECKING
        decision = self._decide(path, actor, is_loading)

        if decision.is_denied:
            self._dispatch_denial(decision, actor)
        elif decision.is_authorized:
            self._pending_redirect = None
            logger.debug(f"Access granted to {decision.path}")

        self._state = decision.state
        self._last_decision = decision
        return decision

    def bind(self, session: SessionStore) -> None:
        """Re-evaluate the current path whenever the session changes."""
        self.unbind()
        self._session = session
        self._unsubscribe = session.subscribe(self._on_session_change)

    def unbind(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
        self._unsubscribe = None
        self._session = None

    def navigate(self, path) -> GuardDecision:
        """Record a navigation to path and evaluate it against the bound session."""
        self._current_path = path
        if self._session is None:
            return self.evaluate(path, None)
        return self.evaluate(path, self._session.actor, self._session.is_loading)

    def navigation_completed(self) -> None:
        """Mark the dispatched redirect as done so later denials redirect again."""
        self._pending_redirect = None

    def _on_session_change(self, session: SessionStore) -> None:
        if self._current_path is None:
            return
        self.evaluate(self._current_path, session.actor, session.is_loading)

    def _decide(self, path, actor: Optional[Actor], is_loading: bool) -> GuardDecision:
        normalized = normalize_path(path)
        attempted = normalized or (path if isinstance(path, str) else "")

        if normalized and normalized in self.public_routes:
            return GuardDecision.authorized(attempted)

        if is_loading:
            return GuardDecision.checking(attempted)

        if actor is None:
            return self._denied(attempted, DenialReason.INVALID_SESSION, self.login_path)

        if actor.is_expired():
            return self._denied(attempted, DenialReason.SESSION_EXPIRED, self.login_path)

        if not actor.roles:
            return self._denied(attempted, DenialReason.NO_ROLE, self.login_path)

        if self.authorizer.can_access(normalized, actor.roles, actor):
            return GuardDecision.authorized(attempted)

        return self._denied(
            attempted,
            DenialReason.INSUFFICIENT_PERMISSION,
            self._insufficient_permission_target(normalized, actor),
        )

    def _insufficient_permission_target(self, normalized: str, actor: Actor) -> str:
        config = self.authorizer.resolve(normalized)
        target = config.redirect_to if config is not None else None

        # Never redirect back onto the denied path
        if not target or target == normalized:
            target = self.resolver.get_default_redirect_path(actor.roles)
        if target == normalized:
            target = self.login_path
        return target

    def _denied(self, path: str, reason: DenialReason, target: str) -> GuardDecision:
        return GuardDecision.denied(path, reason, target, message_for(reason))

    def _dispatch_denial(self, decision: GuardDecision, actor: Optional[Actor]) -> None:
        self.denial_log.log(
            decision.reason,
            decision.path,
            decision.target,
            actor.roles if actor is not None else None,
        )

        try:
            self.notifier(decision.message)
        except Exception as e:
            logger.error(f"Notifier failed for {decision.reason.value}: {e}")

        redirect = (decision.path, decision.target)
        if self._pending_redirect == redirect:
            logger.debug(f"Redirect {decision.path} -> {decision.target} already dispatched")
            return

        self._pending_redirect = redirect
        try:
            self.navigator(decision.target)
        except Exception as e:
            logger.error(f"Navigator failed to redirect to {decision.target}: {e}")
