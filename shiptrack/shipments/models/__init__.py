"""
Shipment Tracking Models
"""

from .shipment import (
    Shipment, ShipmentStatus, ShipmentStatusUpdate,
    PaymentStatus, ShipmentType, generate_tracking_id,
)

__all__ = [
    'Shipment', 'ShipmentStatus', 'ShipmentStatusUpdate',
    'PaymentStatus', 'ShipmentType', 'generate_tracking_id',
]
