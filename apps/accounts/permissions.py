from rest_framework import permissions


class IsAdminRole(permissions.BasePermission):
    """
    Permission check for admin-only operations.

    Requires an authenticated user whose role is 'admin'.
    """
    message = 'Admin role required.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and getattr(user, 'is_admin', False))
