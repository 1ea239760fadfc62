"""
Tests for the shipment models.
"""

import re
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.test import TestCase

from users.models import User
from ..models import Shipment, ShipmentStatus, PaymentStatus, generate_tracking_id
from .helpers import make_shipment


class GenerateTrackingIdTest(TestCase):

    def test_format(self):
        for _ in range(20):
            self.assertRegex(generate_tracking_id(), r'^[0-9A-F]{8}$')


class ShipmentModelTest(TestCase):
    """Test shipment defaults, validation and the status history."""

    def setUp(self):
        self.user = User.objects.create_user(email='owner@example.com', password='secret1', name='Owner')

    def test_defaults(self):
        shipment = make_shipment(self.user)

        self.assertEqual(shipment.status, ShipmentStatus.ORDER_RECEIVED)
        self.assertEqual(shipment.payment_status, PaymentStatus.PENDING)
        self.assertTrue(re.match(r'^[0-9A-F]{8}$', shipment.tracking_id))
        self.assertEqual(shipment.updated_status.count(), 0)
        self.assertIsNotNone(shipment.created_at)

    def test_tracking_id_is_kept_on_later_saves(self):
        shipment = make_shipment(self.user)
        tracking_id = shipment.tracking_id

        shipment.amount = Decimal('75.00')
        shipment.save()
        shipment.refresh_from_db()

        self.assertEqual(shipment.tracking_id, tracking_id)

    def test_tracking_ids_are_unique(self):
        tracking_ids = {make_shipment(self.user).tracking_id for _ in range(10)}
        self.assertEqual(len(tracking_ids), 10)

    def test_invalid_status_fails_validation(self):
        shipment = make_shipment(self.user)
        shipment.status = 'lost-in-space'

        with self.assertRaises(ValidationError) as ctx:
            shipment.full_clean()

        self.assertIn('status', ctx.exception.message_dict)

    def test_negative_amount_fails_validation(self):
        shipment = make_shipment(self.user)
        shipment.amount = Decimal('-1.00')

        with self.assertRaises(ValidationError) as ctx:
            shipment.full_clean()

        self.assertIn('amount', ctx.exception.message_dict)

    def test_record_status_appends_history(self):
        shipment = make_shipment(self.user)

        shipment.record_status(ShipmentStatus.IN_TRANSIT)
        shipment.record_status(ShipmentStatus.DELIVERED)

        shipment = Shipment.objects.get(pk=shipment.pk)
        self.assertEqual(shipment.status, ShipmentStatus.DELIVERED)
        self.assertEqual(
            [entry.status for entry in shipment.updated_status.all()],
            ['in-transit', 'delivered']
        )

    def test_deleting_user_removes_shipments(self):
        shipment = make_shipment(self.user)
        shipment.record_status(ShipmentStatus.PICKED_UP)

        self.user.delete()

        self.assertFalse(Shipment.objects.filter(pk=shipment.pk).exists())
