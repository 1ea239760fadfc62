"""
Shipment Tracking Views
"""

from .shipment_views import ShipmentViewSet
from .admin_views import AdminShipmentViewSet

__all__ = [
    'ShipmentViewSet',
    'AdminShipmentViewSet',
]
