from rest_framework import permissions

from shiptrack.exceptions import NOT_AUTHORIZED_MESSAGE


class IsAdmin(permissions.BasePermission):
    """
    Allows access only to users with the admin role.

    Must be listed after ``IsAuthenticated``: it assumes ``request.user`` is
    already a resolved account.
    """

    message = NOT_AUTHORIZED_MESSAGE

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and request.user.is_admin)
