"""
Shipment Tracking Serializers
"""

from .shipment_serializers import (
    AddressSerializer, PackageDetailsSerializer, ShipmentSerializer,
    ShipmentCreateSerializer, ShipmentTrackingSerializer,
    ShipmentStatusUpdateSerializer,
)

__all__ = [
    'AddressSerializer', 'PackageDetailsSerializer', 'ShipmentSerializer',
    'ShipmentCreateSerializer', 'ShipmentTrackingSerializer',
    'ShipmentStatusUpdateSerializer',
]
