"""Shared API permissions.

Role checks used across the marketplace endpoints. Admin means an
authenticated staff user; everybody else is treated as a client. Object-level
checks accept the owner of a project or custom request, or an admin.
"""

from rest_framework.permissions import SAFE_METHODS, BasePermission


def is_admin(user) -> bool:
    """Return True for authenticated staff users."""
    return bool(user and user.is_authenticated and user.is_staff)


def owner_user_id(obj):
    """User id owning a project (through its client) or a custom request."""
    client = getattr(obj, "client", None)
    if client is not None:
        return client.user_id
    return getattr(obj, "user_id", None)


class IsAdminStaff(BasePermission):
    """Allows access only to authenticated staff (admin) users."""

    message = "Only admin staff users may perform this action."

    def has_permission(self, request, view):
        return is_admin(request.user)


class IsAdminOrReadOnly(BasePermission):
    """Read for everybody; writes for admin staff only."""

    message = "Only admin staff users may modify this resource."

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        return is_admin(request.user)


class IsOwnerOrAdmin(BasePermission):
    """Object access for the owning client or an admin."""

    message = "You do not have access to this record."

    def has_object_permission(self, request, view, obj):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        if user.is_staff:
            return True
        return owner_user_id(obj) == user.id
