"""
Custom permissions for shipment tracking.
"""

from rest_framework.permissions import BasePermission


class IsShipmentOwnerOrAdmin(BasePermission):
    """
    Object permission that allows the shipment's owner or any admin.

    Existence is checked by the view before this runs, so a missing shipment
    is reported as 404 rather than 403.
    """

    def has_object_permission(self, request, view, obj):
        user = request.user

        if user.is_admin or obj.user_id == user.id:
            return True

        self.message = f"User {user.id} is not authorized to access this shipment"
        return False
