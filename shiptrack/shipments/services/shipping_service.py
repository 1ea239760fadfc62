"""
Shipping Service for shipment tracking.

Handles shipment creation, lookup, and the admin mutations of status,
payment status and amount.
"""

import logging
import uuid
from decimal import Decimal, InvalidOperation
from typing import Dict, Any

from django.core.exceptions import ValidationError as ModelValidationError
from django.db import transaction
from django.db.models import QuerySet

from shiptrack.exceptions import ShipmentNotFound, ValidationException
from ..models import Shipment, ShipmentStatus, PaymentStatus

logger = logging.getLogger(__name__)


def _full_clean(shipment: Shipment, **kwargs):
    """Run model validation, reporting failures as a 400."""
    try:
        shipment.full_clean(**kwargs)
    except ModelValidationError as exc:
        messages = [
            f"{field}: {message}"
            for field, field_messages in exc.message_dict.items()
            for message in field_messages
        ]
        raise ValidationException(', '.join(messages), exc.message_dict)


class ShippingService:
    """Service class for shipping operations."""

    @staticmethod
    def get_shipment(shipment_id) -> Shipment:
        """
        Fetch a shipment by primary key.

        Malformed ids are reported the same way as unknown ones.

        Raises:
            ShipmentNotFound: If no shipment has that id
        """
        try:
            pk = uuid.UUID(str(shipment_id))
        except ValueError:
            raise ShipmentNotFound(shipment_id)

        try:
            return Shipment.objects.prefetch_related('updated_status').get(id=pk)
        except Shipment.DoesNotExist:
            raise ShipmentNotFound(shipment_id)

    @staticmethod
    def get_by_tracking_id(tracking_id: str) -> Shipment:
        """Exact match on the public tracking id."""
        try:
            return Shipment.objects.get(tracking_id=tracking_id)
        except Shipment.DoesNotExist:
            raise ShipmentNotFound(tracking_id, 'tracking ID')

    @staticmethod
    def list_for_user(user) -> QuerySet:
        """The caller's own shipments, newest first."""
        return Shipment.objects.filter(user=user).prefetch_related('updated_status').order_by('-created_at')

    @staticmethod
    def create_shipment(user, shipment_data: Dict[str, Any]) -> Shipment:
        """
        Create a shipment owned by ``user``.

        Args:
            user: Owner of the new shipment
            shipment_data: Validated serializer data (model field names)

        Returns:
            Created Shipment instance

        Raises:
            ValidationException: If the record fails model validation
        """
        shipment = Shipment(
            user=user,
            amount=shipment_data.get('amount', Decimal('0.00')),
            source=dict(shipment_data['source']),
            destination=dict(shipment_data['destination']),
            package_details=_plain(shipment_data['package_details']),
            shipment_type=shipment_data['shipment_type'],
        )

        # tracking_id is assigned on save
        _full_clean(shipment, exclude=['tracking_id'])
        shipment.save()

        logger.info(f"Shipment {shipment.tracking_id} created for user {user.id}")
        return shipment

    @staticmethod
    def update_status(shipment_id, new_status) -> Shipment:
        """
        Set the current status and append it to the status history.

        Any enumerated status may follow any other.

        Raises:
            ValidationException: If the status is missing or not enumerated
            ShipmentNotFound: If the shipment does not exist
        """
        if not new_status:
            raise ValidationException('Please provide a status')

        shipment = ShippingService.get_shipment(shipment_id)

        if new_status not in ShipmentStatus.values:
            raise ValidationException(
                f"Invalid status '{new_status}'",
                {'status': [f"'{new_status}' is not a valid shipment status"]}
            )

        with transaction.atomic():
            shipment.record_status(new_status)

        logger.info(f"Shipment {shipment.tracking_id} status updated to {new_status}")
        return ShippingService.get_shipment(shipment.id)

    @staticmethod
    def update_payment_status(shipment_id, payment_status) -> Shipment:
        """
        Set the payment status. The status history is not touched.

        Raises:
            ValidationException: If the value is missing or not enumerated
            ShipmentNotFound: If the shipment does not exist
        """
        if not payment_status:
            raise ValidationException('Please provide a payment status')

        shipment = ShippingService.get_shipment(shipment_id)

        if payment_status not in PaymentStatus.values:
            raise ValidationException(
                f"Invalid payment status '{payment_status}'",
                {'paymentStatus': [f"'{payment_status}' is not a valid payment status"]}
            )

        shipment.payment_status = payment_status
        shipment.save(update_fields=['payment_status', 'updated_at'])

        logger.info(f"Shipment {shipment.tracking_id} payment status updated to {payment_status}")
        return shipment

    @staticmethod
    def update_amount(shipment_id, amount) -> Shipment:
        """
        Set the shipment charge.

        ``None`` leaves the amount unchanged and only refreshes ``updated_at``.

        Raises:
            ValidationException: If the amount is not a non-negative number that fits the column
            ShipmentNotFound: If the shipment does not exist
        """
        value = None
        if amount is not None:
            value = _parse_amount(amount)

        shipment = ShippingService.get_shipment(shipment_id)

        if value is None:
            shipment.save(update_fields=['updated_at'])
        else:
            shipment.amount = value
            _full_clean(shipment, exclude=['tracking_id'])
            shipment.save(update_fields=['amount', 'updated_at'])

        logger.info(f"Shipment {shipment.tracking_id} amount updated to {shipment.amount}")
        return shipment

    @staticmethod
    def delete_shipment(shipment_id) -> None:
        """Permanently delete a shipment and its status history."""
        shipment = ShippingService.get_shipment(shipment_id)
        tracking_id = shipment.tracking_id
        shipment.delete()
        logger.info(f"Shipment {tracking_id} deleted")


def _parse_amount(amount) -> Decimal:
    if isinstance(amount, bool):
        raise ValidationException('Please provide a valid amount')
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        raise ValidationException('Please provide a valid amount')
    if not value.is_finite() or value < 0:
        raise ValidationException('Please provide a valid amount')
    try:
        return value.quantize(Decimal('0.01'))
    except InvalidOperation:
        raise ValidationException('Please provide a valid amount')


def _plain(value):
    """Convert nested serializer output into plain dicts for JSON storage."""
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    return value
