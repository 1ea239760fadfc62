"""
Shipment Tracking Services
"""

from .query_service import ShipmentQuery, ShipmentPage, SHIPMENT_QUERY_FIELDS
from .shipping_service import ShippingService

__all__ = [
    'ShipmentQuery', 'ShipmentPage', 'SHIPMENT_QUERY_FIELDS',
    'ShippingService',
]
