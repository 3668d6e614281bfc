"""Session store adapter.

Holds the current actor and loading flag, notifies subscribers on every
change and optionally persists the actor as JSON so a session survives
restarts. The authorization core never reads this store directly; the
guard is handed the actor explicitly.
"""

import json
from pathlib import Path
from typing import Callable, List, Optional

from ...common.logger import get_logger
from ..rbac.actor import Actor
from ..rbac.checker import PermissionEvaluator, get_evaluator
from ..routes.authorizer import RouteAuthorizer, get_authorizer

logger = get_logger("session_store")

SessionListener = Callable[["SessionStore"], None]


class SessionStore:
    """Current session state with explicit change subscriptions."""

    def __init__(
        self,
        storage_path: Optional[str] = None,
        *,
        authorizer: Optional[RouteAuthorizer] = None,
        evaluator: Optional[PermissionEvaluator] = None,
    ):
        """
        Initialize the store.

        Args:
            storage_path: JSON file to persist the actor to; no persistence when None
            authorizer: Authorizer used by the route convenience checks
            evaluator: Evaluator used by the role/permission convenience checks
        """
        self.storage_path = Path(storage_path) if storage_path else None
        self.authorizer = authorizer or get_authorizer()
        self.evaluator = evaluator or get_evaluator()
        self._actor: Optional[Actor] = None
        self._is_loading = True
        self._listeners: List[SessionListener] = []

    @property
    def actor(self) -> Optional[Actor]:
        return self._actor

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    def set_actor(self, actor: Optional[Actor]) -> None:
        """Establish (or replace) the session actor."""
        self._actor = actor
        self._is_loading = False
        self._persist()
        self._notify()

    def set_loading(self, loading: bool) -> None:
        self._is_loading = loading
        self._notify()

    def logout(self) -> None:
        """Clear the session actor."""
        self._actor = None
        self._is_loading = False
        self._persist()
        self._notify()

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """
        Register a listener called after every session change.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # Convenience checks against the current actor

    def role_list(self) -> List[str]:
        return self._actor.role_list if self._actor else []

    def has_role(self, role: str) -> bool:
        return self.evaluator.has_role(self._actor, role)

    def has_permission(self, action, resource) -> bool:
        return self.evaluator.has_permission(self._actor, action, resource)

    def can_access_route(self, path) -> bool:
        if self._actor is None:
            return False
        return self.authorizer.can_access(path, self._actor.roles, self._actor)

    def get_accessible_routes(self) -> List[str]:
        if self._actor is None:
            return []
        return self.authorizer.get_accessible_routes(self._actor.roles, self._actor)

    # Persistence

    def save(self) -> None:
        """Write the current actor to the storage file."""
        if self.storage_path is None:
            return
        data = {"actor": self._actor.to_dict() if self._actor else None}
        self.storage_path.parent.mkdir(parents=True, exist_ok=True)
        with self.storage_path.open("w") as f:
            json.dump(data, f)

    def load(self) -> Optional[Actor]:
        """
        Restore the actor from the storage file.

        A missing or unreadable file leaves the session empty.

        Returns:
            The restored actor, or None
        """
        actor = None
        if self.storage_path is not None and self.storage_path.exists():
            try:
                with self.storage_path.open("r") as f:
                    data = json.load(f)
                if data.get("actor"):
                    actor = Actor.from_dict(data["actor"])
            except (OSError, ValueError, AttributeError) as e:
                logger.warning(f"Could not restore session from {self.storage_path}: {e}")
                actor = None

        self._actor = actor
        self._is_loading = False
        self._notify()
        return actor

    def _persist(self) -> None:
        try:
            self.save()
        except OSError as e:
            logger.error(f"Failed to persist session to {self.storage_path}: {e}")

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
