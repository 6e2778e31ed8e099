# apps/users/permissions.py
from rest_framework import permissions


class IsManager(permissions.BasePermission):
    message = "Manager access required"

    def has_permission(self, request, view):
        return (
            request.user.is_authenticated
            and request.user.is_manager
        )


def can_manage_store(user, store):
    """Store owner or a manager."""
    if not user.is_authenticated:
        return False
    return store.owner_id == user.id or user.is_manager
