"""Permission classes guarding the back-office API."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore


def _is_admin(user) -> bool:
    if not user or not user.is_authenticated:
        return False
    if getattr(user, "is_staff", False) or getattr(user, "is_superuser", False):
        return True
    return hasattr(user, "is_admin") and user.is_admin()


class IsAdmin(permissions.BasePermission):
    """
    Only administrators (role ADMIN, staff or superuser) may access.
    """

    message = "Accès réservé aux administrateurs."

    def has_permission(self, request, view) -> bool:  # type: ignore
        return _is_admin(request.user)


class IsAdminOrReadOnly(permissions.BasePermission):
    """
    Anyone may read, only administrators may write.
    """

    message = "Accès réservé aux administrateurs."

    def has_permission(self, request, view) -> bool:  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        return _is_admin(request.user)
