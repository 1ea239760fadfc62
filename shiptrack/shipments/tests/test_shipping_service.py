"""
Tests for ShippingService.
"""

import uuid
from decimal import Decimal

from django.test import TestCase

from shiptrack.exceptions import ShipmentNotFound, ValidationException
from users.models import User
from ..models import Shipment, ShipmentStatus, PaymentStatus
from ..services import ShippingService
from .helpers import make_shipment


class CreateShipmentTest(TestCase):

    def setUp(self):
        self.user = User.objects.create_user(email='owner@example.com', password='secret1', name='Owner')

    def test_create_shipment(self):
        shipment = ShippingService.create_shipment(self.user, {
            'amount': Decimal('20.00'),
            'source': {'address': 'a', 'city': 'b', 'state': 'c', 'country': 'd'},
            'destination': {'address': 'e', 'city': 'f', 'state': 'g', 'country': 'h'},
            'package_details': {'weight': 1.0, 'dimensions': {'length': 1.0, 'width': 2.0, 'height': 3.0}},
            'shipment_type': 'express',
        })

        self.assertEqual(shipment.user, self.user)
        self.assertEqual(shipment.status, ShipmentStatus.ORDER_RECEIVED)
        self.assertEqual(len(shipment.tracking_id), 8)
        self.assertEqual(Shipment.objects.get(pk=shipment.pk).package_details['dimensions']['height'], 3.0)

    def test_invalid_shipment_type_rejected(self):
        with self.assertRaises(ValidationException) as ctx:
            ShippingService.create_shipment(self.user, {
                'source': {}, 'destination': {}, 'package_details': {}, 'shipment_type': 'teleport',
            })

        self.assertIn('shipment_type', ctx.exception.details)
        self.assertFalse(Shipment.objects.exists())


class ShipmentLookupTest(TestCase):

    def setUp(self):
        self.user = User.objects.create_user(email='owner@example.com', password='secret1', name='Owner')
        self.shipment = make_shipment(self.user)

    def test_get_shipment(self):
        self.assertEqual(ShippingService.get_shipment(str(self.shipment.id)), self.shipment)

    def test_get_shipment_unknown_id(self):
        missing = uuid.uuid4()
        with self.assertRaises(ShipmentNotFound) as ctx:
            ShippingService.get_shipment(missing)

        self.assertEqual(ctx.exception.message, f"Shipment not found with id of {missing}")

    def test_get_shipment_malformed_id(self):
        with self.assertRaises(ShipmentNotFound):
            ShippingService.get_shipment('not-a-uuid')

    def test_get_by_tracking_id(self):
        self.assertEqual(ShippingService.get_by_tracking_id(self.shipment.tracking_id), self.shipment)

        with self.assertRaises(ShipmentNotFound) as ctx:
            ShippingService.get_by_tracking_id('ZZZZZZZZ')

        self.assertEqual(ctx.exception.message, 'Shipment not found with tracking ID of ZZZZZZZZ')

    def test_list_for_user(self):
        other = User.objects.create_user(email='other@example.com', password='secret1', name='Other')
        make_shipment(other)

        self.assertEqual(list(ShippingService.list_for_user(self.user)), [self.shipment])


class StatusUpdateTest(TestCase):

    def setUp(self):
        self.user = User.objects.create_user(email='owner@example.com', password='secret1', name='Owner')
        self.shipment = make_shipment(self.user)

    def test_every_status_appends_one_entry(self):
        for count, new_status in enumerate(ShipmentStatus.values, 1):
            shipment = ShippingService.update_status(self.shipment.id, new_status)

            self.assertEqual(shipment.status, new_status)
            history = list(shipment.updated_status.all())
            self.assertEqual(len(history), count)
            self.assertEqual(history[-1].status, new_status)

    def test_missing_status(self):
        with self.assertRaises(ValidationException) as ctx:
            ShippingService.update_status(self.shipment.id, '')

        self.assertEqual(ctx.exception.message, 'Please provide a status')

    def test_missing_shipment_checked_before_status_value(self):
        with self.assertRaises(ShipmentNotFound):
            ShippingService.update_status(uuid.uuid4(), 'not-a-status')

    def test_invalid_status(self):
        with self.assertRaises(ValidationException):
            ShippingService.update_status(self.shipment.id, 'lost-in-space')

        self.shipment.refresh_from_db()
        self.assertEqual(self.shipment.status, ShipmentStatus.ORDER_RECEIVED)
        self.assertEqual(self.shipment.updated_status.count(), 0)


class PaymentUpdateTest(TestCase):

    def setUp(self):
        self.user = User.objects.create_user(email='owner@example.com', password='secret1', name='Owner')
        self.shipment = make_shipment(self.user)

    def test_update_payment_status(self):
        shipment = ShippingService.update_payment_status(self.shipment.id, 'successful')

        self.assertEqual(shipment.payment_status, PaymentStatus.SUCCESSFUL)
        self.assertEqual(shipment.updated_status.count(), 0)
        self.assertGreater(shipment.updated_at, self.shipment.updated_at)

    def test_error_order(self):
        with self.assertRaises(ValidationException) as ctx:
            ShippingService.update_payment_status(uuid.uuid4(), None)
        self.assertEqual(ctx.exception.message, 'Please provide a payment status')

        with self.assertRaises(ShipmentNotFound):
            ShippingService.update_payment_status(uuid.uuid4(), 'refunded')

        with self.assertRaises(ValidationException):
            ShippingService.update_payment_status(self.shipment.id, 'refunded')


class AmountUpdateTest(TestCase):

    def setUp(self):
        self.user = User.objects.create_user(email='owner@example.com', password='secret1', name='Owner')
        self.shipment = make_shipment(self.user, amount=Decimal('50.00'))

    def test_update_amount(self):
        for amount, expected in ((0, Decimal('0.00')), (12.5, Decimal('12.50')), ('99.99', Decimal('99.99'))):
            shipment = ShippingService.update_amount(self.shipment.id, amount)
            self.assertEqual(Shipment.objects.get(pk=shipment.pk).amount, expected)

    def test_invalid_amounts_leave_value_unchanged(self):
        for amount in (-1, '-0.01', 'free', True, [5]):
            with self.assertRaises(ValidationException) as ctx:
                ShippingService.update_amount(self.shipment.id, amount)
            self.assertEqual(ctx.exception.message, 'Please provide a valid amount')

        self.shipment.refresh_from_db()
        self.assertEqual(self.shipment.amount, Decimal('50.00'))

    def test_absent_amount_only_touches_timestamp(self):
        shipment = ShippingService.update_amount(self.shipment.id, None)

        shipment.refresh_from_db()
        self.assertEqual(shipment.amount, Decimal('50.00'))
        self.assertGreater(shipment.updated_at, self.shipment.updated_at)

    def test_amount_beyond_column_precision(self):
        for amount in (1e15, 1e30, '9999999999999.99'):
            with self.assertRaises(ValidationException):
                ShippingService.update_amount(self.shipment.id, amount)

        self.shipment.refresh_from_db()
        self.assertEqual(self.shipment.amount, Decimal('50.00'))

    def test_largest_amount_that_fits(self):
        shipment = ShippingService.update_amount(self.shipment.id, '9999999999.99')

        self.assertEqual(Shipment.objects.get(pk=shipment.pk).amount, Decimal('9999999999.99'))

    def test_missing_shipment(self):
        with self.assertRaises(ShipmentNotFound):
            ShippingService.update_amount(uuid.uuid4(), 10)


class DeleteShipmentTest(TestCase):

    def test_delete_cascades_history(self):
        user = User.objects.create_user(email='owner@example.com', password='secret1', name='Owner')
        shipment = make_shipment(user)
        shipment.record_status(ShipmentStatus.IN_TRANSIT)

        ShippingService.delete_shipment(shipment.id)

        self.assertFalse(Shipment.objects.filter(pk=shipment.pk).exists())
        with self.assertRaises(ShipmentNotFound):
            ShippingService.delete_shipment(shipment.id)
