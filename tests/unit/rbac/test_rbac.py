"""Tests for RBAC permission model and evaluator."""

import pytest
from datetime import datetime, timedelta, timezone

from routeauth.core.rbac.permissions import (
    Action, Permission, Resource, coerce_permission, parse_action,
)
from routeauth.core.rbac.actor import Actor
from routeauth.core.rbac.checker import (
    PermissionEvaluator, has_permission, has_role,
)
from routeauth.core.rbac.roles import ADMIN, SALE, STANDARD_ROLES, USER


class TestPermissionModel:
    """Test permission definitions."""

    def test_permission_string_format(self):
        """Test permission string format."""
        perm = Permission(Action.READ, "file")
        assert str(perm) == "file:read"

    def test_permission_from_string(self):
        """Test parsing permission from string."""
        perm = Permission.from_string("user:manage")
        assert perm.resource == "user"
        assert perm.action == Action.MANAGE

    def test_invalid_permission_format(self):
        """Test parsing invalid permission strings."""
        with pytest.raises(ValueError):
            Permission.from_string("invalid")

        with pytest.raises(ValueError):
            Permission.from_string("too:many:parts")

        with pytest.raises(ValueError):
            Permission.from_string("file:fly")  # Unknown action

    def test_permission_of_accepts_enums_and_strings(self):
        """Test building permissions from loose parts."""
        assert Permission.of("read", Resource.FILE) == Permission(Action.READ, "file")
        assert Permission.of(Action.EXPORT, "payment") == Permission(Action.EXPORT, "payment")

    def test_action_enumeration_is_closed(self):
        """Test the action set."""
        assert {a.value for a in Action} == {
            "read", "create", "update", "delete", "approve", "export", "manage",
        }

    def test_coerce_permission_forms(self):
        """Test every accepted permission form."""
        expected = Permission(Action.DELETE, "file")
        assert coerce_permission(expected) is expected
        assert coerce_permission("file:delete") == expected
        assert coerce_permission({"action": "delete", "resource": "file"}) == expected
        assert coerce_permission(["delete", "file"]) == expected

    def test_coerce_permission_rejects_garbage(self):
        with pytest.raises(ValueError):
            coerce_permission({"action": "read"})
        with pytest.raises(ValueError):
            coerce_permission(42)

    def test_parse_action(self):
        assert parse_action("approve") == Action.APPROVE
        assert parse_action(Action.READ) == Action.READ
        assert parse_action("fly") is None

    def test_standard_roles(self):
        assert STANDARD_ROLES == [ADMIN, USER, SALE]


class TestActor:
    """Test actor construction."""

    def test_create_deduplicates_roles(self):
        actor = Actor.create("a", roles=["User", "User", "Sale", ""])
        assert actor.roles == frozenset({"User", "Sale"})
        assert actor.role_list == ["Sale", "User"]

    def test_create_coerces_grants(self):
        actor = Actor.create("a", roles=["User"], grants={"User": ["file:read"]})
        assert actor.grants["User"] == (Permission(Action.READ, "file"),)

    def test_from_user_payload(self, sample_user_payload):
        """Test building an actor from the backend user document."""
        actor = Actor.from_user_payload(sample_user_payload)

        assert actor.id == sample_user_payload["id"]
        assert actor.roles == frozenset({"User", "Sale"})
        assert Permission(Action.DELETE, "file") in actor.grants["User"]
        assert actor.grants["Sale"] == (Permission(Action.EXPORT, "payment"),)

    def test_from_user_payload_skips_unknown_actions(self):
        payload = {
            "id": "u",
            "user_roles": [{
                "role": {
                    "name": "User",
                    "role_permissions": [
                        {"permission": {"action": "fly", "resource": "file"}},
                        {"permission": {"action": "read", "resource": "file"}},
                    ],
                },
            }],
        }
        actor = Actor.from_user_payload(payload)
        assert actor.grants["User"] == (Permission(Action.READ, "file"),)

    def test_from_user_payload_without_roles(self):
        actor = Actor.from_user_payload({"id": "u"})
        assert actor.roles == frozenset()

    def test_permissions_union(self, sample_user_payload):
        actor = Actor.from_user_payload(sample_user_payload)
        assert actor.permissions() == {
            Permission(Action.READ, "file"),
            Permission(Action.DELETE, "file"),
            Permission(Action.EXPORT, "payment"),
        }

    def test_expiry(self):
        past = datetime.now(timezone.utc) - timedelta(minutes=1)
        future = datetime.now(timezone.utc) + timedelta(minutes=30)

        assert Actor.create("a", ["User"], expires_at=past).is_expired()
        assert not Actor.create("a", ["User"], expires_at=future).is_expired()
        assert not Actor.create("a", ["User"]).is_expired()

    def test_naive_expiry_is_utc(self):
        naive_past = datetime.now(timezone.utc).replace(tzinfo=None) - timedelta(hours=1)
        assert Actor.create("a", ["User"], expires_at=naive_past).is_expired()

    def test_dict_round_trip_keeps_grants(self, user):
        restored = Actor.from_dict(user.to_dict())
        assert restored == user


class TestPermissionEvaluator:
    """Test PermissionEvaluator class."""

    def setup_method(self):
        self.evaluator = PermissionEvaluator()

    def test_has_role(self, user):
        assert self.evaluator.has_role(user, "User")
        assert not self.evaluator.has_role(user, "Admin")

    def test_has_role_without_actor(self):
        """No actor is a plain denial, not an error."""
        assert not self.evaluator.has_role(None, "User")
        assert not self.evaluator.has_any_role(None, ["User"])

    def test_has_any_role(self, user):
        assert self.evaluator.has_any_role(user, ["Admin", "User"])
        assert not self.evaluator.has_any_role(user, ["Admin", "Sale"])
        assert not self.evaluator.has_any_role(user, [])

    def test_has_permission_exact_match(self, user):
        """Test exact permission matching."""
        assert self.evaluator.has_permission(user, Action.READ, "file")
        assert self.evaluator.has_permission(user, "create", Resource.FILE)
        assert not self.evaluator.has_permission(user, Action.DELETE, "file")
        assert not self.evaluator.has_permission(user, Action.READ, "user")

    def test_no_action_hierarchy(self):
        """Manage does not imply read."""
        actor = Actor.create("a", ["Admin"], grants={"Admin": ["file:manage"]})
        assert self.evaluator.has_permission(actor, Action.MANAGE, "file")
        assert not self.evaluator.has_permission(actor, Action.READ, "file")

    def test_grants_only_through_held_roles(self):
        """Grants listed for a role the actor does not hold are ignored."""
        actor = Actor.create("a", ["User"], grants={"Admin": ["user:manage"]})
        assert not self.evaluator.has_permission(actor, Action.MANAGE, "user")

    def test_any_role_may_grant(self, sample_user_payload):
        actor = Actor.from_user_payload(sample_user_payload)
        assert self.evaluator.has_permission(actor, Action.EXPORT, "payment")
        assert self.evaluator.has_permission(actor, Action.DELETE, "file")

    def test_unknown_action_is_denied(self, user):
        assert not self.evaluator.has_permission(user, "fly", "file")

    def test_has_permission_without_actor(self):
        assert not self.evaluator.has_permission(None, Action.READ, "file")

    def test_has_all_permissions(self, user):
        """Test checking for all of multiple permissions."""
        assert self.evaluator.has_all_permissions(user, ["file:read", "folder:read"])
        assert not self.evaluator.has_all_permissions(user, ["file:read", "file:delete"])
        assert self.evaluator.has_all_permissions(user, [])
        assert not self.evaluator.has_all_permissions(None, [])

    def test_shorthands(self, user):
        assert self.evaluator.can(user, "read", "file")
        assert self.evaluator.can_read(user, Resource.FOLDER)
        assert self.evaluator.can_create(user, "file")
        assert not self.evaluator.can_update(user, "file")
        assert not self.evaluator.can_delete(user, "file")
        assert not self.evaluator.can_manage(user, "file")

    def test_module_helpers(self, user):
        assert has_role(user, "User")
        assert has_permission(user, "read", "file")
        assert not has_permission(None, "read", "file")
