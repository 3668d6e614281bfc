"""RBAC (Role-Based Access Control) module for routeauth.

This module defines the permission model, the actor, and the role and
permission checks used by the route authorizer.
"""

from .permissions import Permission, Resource, Action, coerce_permission
from .actor import Actor
from .checker import PermissionEvaluator, get_evaluator, has_permission, has_role
from .roles import ADMIN, USER, SALE, STANDARD_ROLES

__all__ = [
    "Permission",
    "Resource",
    "Action",
    "coerce_permission",
    "Actor",
    "PermissionEvaluator",
    "get_evaluator",
    "has_permission",
    "has_role",
    "ADMIN",
    "USER",
    "SALE",
    "STANDARD_ROLES",
]
