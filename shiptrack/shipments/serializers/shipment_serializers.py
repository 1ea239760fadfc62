"""
Shipment serializers for shipment tracking.

The API speaks camelCase; the model fields are snake_case and mapped with
``source=``.
"""

from decimal import Decimal

from rest_framework import serializers

from ..models import Shipment, ShipmentStatusUpdate, ShipmentType


class AddressSerializer(serializers.Serializer):
    """Address block used for both source and destination."""

    address = serializers.CharField(max_length=255)
    city = serializers.CharField(max_length=100)
    state = serializers.CharField(max_length=100)
    country = serializers.CharField(max_length=100)


class DimensionsSerializer(serializers.Serializer):
    length = serializers.FloatField(min_value=0)
    width = serializers.FloatField(min_value=0)
    height = serializers.FloatField(min_value=0)


class PackageDetailsSerializer(serializers.Serializer):
    weight = serializers.FloatField(min_value=0)
    dimensions = DimensionsSerializer()
    description = serializers.CharField(required=False, allow_blank=True)


class ShipmentStatusUpdateSerializer(serializers.ModelSerializer):
    """One audit trail entry, keyed ``shipment`` on the wire."""

    shipment = serializers.CharField(source='status', read_only=True)

    class Meta:
        model = ShipmentStatusUpdate
        fields = ['shipment', 'timestamp']
        read_only_fields = fields


class ShipmentSerializer(serializers.ModelSerializer):
    """
    Full shipment representation.

    Accepts an optional ``fields`` keyword to restrict the output to a
    subset of field names; ``id`` is always kept.
    """

    trackingId = serializers.CharField(source='tracking_id', read_only=True)
    user = serializers.PrimaryKeyRelatedField(read_only=True)
    packageDetails = serializers.JSONField(source='package_details', read_only=True)
    updatedStatus = ShipmentStatusUpdateSerializer(source='updated_status', many=True, read_only=True)
    paymentStatus = serializers.CharField(source='payment_status', read_only=True)
    shipmentType = serializers.CharField(source='shipment_type', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Shipment
        fields = [
            'id', 'trackingId', 'user', 'amount', 'source', 'destination',
            'packageDetails', 'status', 'updatedStatus', 'paymentStatus',
            'shipmentType', 'createdAt', 'updatedAt'
        ]
        read_only_fields = fields

    def __init__(self, *args, **kwargs):
        fields = kwargs.pop('fields', None)
        super().__init__(*args, **kwargs)

        if fields is not None:
            allowed = set(fields) | {'id'}
            for field_name in set(self.fields) - allowed:
                self.fields.pop(field_name)


class ShipmentCreateSerializer(serializers.ModelSerializer):
    """Serializer for creating shipments. Ownership and status are server-controlled."""

    amount = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal('0'),
        required=False, default=Decimal('0.00')
    )
    source = AddressSerializer()
    destination = AddressSerializer()
    packageDetails = PackageDetailsSerializer(source='package_details')
    shipmentType = serializers.ChoiceField(source='shipment_type', choices=ShipmentType.choices)

    class Meta:
        model = Shipment
        fields = ['amount', 'source', 'destination', 'packageDetails', 'shipmentType']


class ShipmentTrackingSerializer(serializers.ModelSerializer):
    """
    Public tracking projection.

    Exposes status and route only: no amount, package details, owner or
    status history.
    """

    trackingId = serializers.CharField(source='tracking_id', read_only=True)
    payment = serializers.CharField(source='payment_status', read_only=True)
    source = serializers.SerializerMethodField()
    destination = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    ADDRESS_FIELDS = ('address', 'city', 'state', 'country')

    class Meta:
        model = Shipment
        fields = [
            'id', 'trackingId', 'status', 'payment', 'source', 'destination',
            'createdAt', 'updatedAt'
        ]
        read_only_fields = fields

    def _public_address(self, value):
        value = value or {}
        return {key: value.get(key) for key in self.ADDRESS_FIELDS}

    def get_source(self, obj):
        return self._public_address(obj.source)

    def get_destination(self, obj):
        return self._public_address(obj.destination)

