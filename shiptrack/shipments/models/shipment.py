"""
Shipment models for shipment tracking.
"""

import uuid
from decimal import Decimal
from django.db import models
from django.conf import settings
from django.core.validators import MinValueValidator
from django.utils import timezone

TRACKING_ID_LENGTH = 8


class ShipmentStatus(models.TextChoices):
    """Shipment lifecycle labels. Any value may follow any other."""
    ORDER_RECEIVED = 'order-received', 'Order Received'
    AWAITING_PICKUP = 'awaiting-pickup', 'Awaiting Pickup'
    PICKED_UP = 'picked-up', 'Picked Up'
    IN_TRANSIT = 'in-transit', 'In Transit'
    ARRIVED_AT_SORTING_FACILITY = 'arrived-at-sorting-facility', 'Arrived at Sorting Facility'
    DEPARTED_FROM_SORTING_FACILITY = 'departed-from-sorting-facility', 'Departed from Sorting Facility'
    OUT_FOR_DELIVERY = 'out-for-delivery', 'Out for Delivery'
    DELIVERED = 'delivered', 'Delivered'
    DELIVERY_ATTEMPTED = 'delivery-attempted', 'Delivery Attempted'
    FAILED_DELIVERY = 'failed-delivery', 'Failed Delivery'
    ADDRESS_ISSUE = 'address-issue', 'Address Issue'
    HELD_AT_CUSTOMS = 'held-at-customs', 'Held at Customs'
    DELAYED = 'delayed', 'Delayed'
    DAMAGED_IN_TRANSIT = 'damaged-in-transit', 'Damaged in Transit'
    RETURN_INITIATED = 'return-initiated', 'Return Initiated'
    RETURN_IN_TRANSIT = 'return-in-transit', 'Return in Transit'
    RETURN_RECEIVED = 'return-received', 'Return Received'
    REFUND_PROCESSED = 'refund-processed', 'Refund Processed'
    CANCELLED = 'cancelled', 'Cancelled'


class PaymentStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    SUCCESSFUL = 'successful', 'Successful'


class ShipmentType(models.TextChoices):
    STANDARD = 'standard', 'Standard'
    EXPRESS = 'express', 'Express'


def generate_tracking_id() -> str:
    """Return a short public identifier: the first 8 hex digits of a UUID4, upper-cased."""
    return uuid.uuid4().hex[:TRACKING_ID_LENGTH].upper()


class Shipment(models.Model):
    """
    Shipment owned by a single user.

    ``source``, ``destination`` and ``package_details`` are stored as JSON
    documents and validated by the API serializers before every write.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Public identifier, assigned on first save and never regenerated
    tracking_id = models.CharField(
        max_length=TRACKING_ID_LENGTH,
        unique=True,
        editable=False,
        help_text="Short public tracking identifier"
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='shipments',
        help_text="User who owns the shipment"
    )

    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0'))],
        help_text="Shipment charge"
    )

    # Addresses: {address, city, state, country}
    source = models.JSONField(help_text="Origin address information")
    destination = models.JSONField(help_text="Destination address information")

    # {weight, dimensions: {length, width, height}, description}
    package_details = models.JSONField(help_text="Package weight, dimensions and description")

    status = models.CharField(
        max_length=40,
        choices=ShipmentStatus.choices,
        default=ShipmentStatus.ORDER_RECEIVED,
        help_text="Current shipment status"
    )
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING
    )
    shipment_type = models.CharField(
        max_length=20,
        choices=ShipmentType.choices
    )

    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', '-created_at'], name='shipments_s_user_id_5c1b0e_idx'),
            models.Index(fields=['status', '-created_at'], name='shipments_s_status_8f2a41_idx'),
        ]

    def __str__(self):
        return f"Shipment {self.tracking_id} ({self.status})"

    def save(self, *args, **kwargs):
        """Override save to assign a tracking id if not set."""
        if not self.tracking_id:
            self.tracking_id = self._unique_tracking_id()
        super().save(*args, **kwargs)

    @classmethod
    def _unique_tracking_id(cls) -> str:
        tracking_id = generate_tracking_id()
        while cls.objects.filter(tracking_id=tracking_id).exists():
            tracking_id = generate_tracking_id()
        return tracking_id

    def record_status(self, new_status: str) -> 'ShipmentStatusUpdate':
        """Set the current status and append it to the audit trail."""
        self.status = new_status
        self.save(update_fields=['status', 'updated_at'])
        return self.updated_status.create(status=new_status)


class ShipmentStatusUpdate(models.Model):
    """
    One entry of a shipment's append-only status history.

    Rows are only ever inserted; ordering is by timestamp, then insertion.
    """

    id = models.BigAutoField(primary_key=True)
    shipment = models.ForeignKey(
        Shipment,
        on_delete=models.CASCADE,
        related_name='updated_status'
    )
    status = models.CharField(max_length=40, choices=ShipmentStatus.choices)
    timestamp = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ['timestamp', 'id']
        indexes = [
            models.Index(fields=['shipment', 'timestamp'], name='shipments_s_shipmen_3d9c72_idx'),
        ]

    def __str__(self):
        return f"{self.shipment_id} -> {self.status} at {self.timestamp}"
