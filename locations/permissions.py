"""
Locations — Permissions

Location data is public and read-only for everyone but staff.

@file locations/permissions.py
"""

from rest_framework.permissions import SAFE_METHODS, BasePermission


class CanModifyLocations(BasePermission):
    """Anyone may read; only staff and superusers create/edit locations."""

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        user = request.user
        return bool(user and user.is_authenticated and (user.is_staff or user.is_superuser))
