"""
Shared fixtures for shipment tests.
"""

import copy
from decimal import Decimal

from ..models import Shipment

SHIPMENT_PAYLOAD = {
    'shipmentType': 'standard',
    'amount': 50,
    'source': {
        'address': '12 Marina Road',
        'city': 'Lagos',
        'state': 'Lagos',
        'country': 'Nigeria'
    },
    'destination': {
        'address': '4 Ring Road',
        'city': 'Accra',
        'state': 'Greater Accra',
        'country': 'Ghana'
    },
    'packageDetails': {
        'weight': 2.5,
        'dimensions': {'length': 30, 'width': 20, 'height': 10},
        'description': 'Books'
    }
}


def shipment_payload(**overrides):
    payload = copy.deepcopy(SHIPMENT_PAYLOAD)
    payload.update(overrides)
    return payload


def make_shipment(user, **fields):
    """Create a shipment row directly, bypassing the API."""
    values = {
        'amount': Decimal('50.00'),
        'source': copy.deepcopy(SHIPMENT_PAYLOAD['source']),
        'destination': copy.deepcopy(SHIPMENT_PAYLOAD['destination']),
        'package_details': copy.deepcopy(SHIPMENT_PAYLOAD['packageDetails']),
        'shipment_type': 'standard',
    }
    values.update(fields)
    return Shipment.objects.create(user=user, **values)
