"""
Admin shipment views: filtered listing and field mutations.
"""

from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from users.permissions import IsAdmin
from ..models import Shipment
from ..services import ShippingService, ShipmentQuery
from ..serializers import ShipmentSerializer


def _body_value(request, key):
    """Read one key from a JSON object body; other body shapes yield ``None``."""
    data = request.data
    if hasattr(data, 'get'):
        return data.get(key)
    return None


class AdminShipmentViewSet(viewsets.GenericViewSet):
    """
    ViewSet for admin shipment management.

    Listing accepts field filters (``field`` or ``field[gt|gte|lt|lte|in]``),
    ``select``, ``sort``, ``page``, ``limit``, ``startDate``, ``endDate`` and
    ``trackingId`` query parameters.
    """

    permission_classes = [IsAuthenticated, IsAdmin]
    serializer_class = ShipmentSerializer

    def list(self, request):
        query = ShipmentQuery.from_params(request.query_params)
        page = query.apply(Shipment.objects.prefetch_related('updated_status'))

        serializer = ShipmentSerializer(page.results, many=True, fields=page.fields)
        return Response({
            'success': True,
            'count': page.count,
            'pagination': page.pagination,
            'data': serializer.data
        })

    def destroy(self, request, pk=None):
        ShippingService.delete_shipment(pk)
        return Response({'success': True})

    @action(detail=True, methods=['put'], url_path='status')
    def update_status(self, request, pk=None):
        """Set the status and append it to the history."""
        shipment = ShippingService.update_status(pk, _body_value(request, 'status'))
        return Response({
            'success': True,
            'data': ShipmentSerializer(shipment).data
        })

    @action(detail=True, methods=['put'], url_path='payment')
    def update_payment(self, request, pk=None):
        shipment = ShippingService.update_payment_status(pk, _body_value(request, 'paymentStatus'))
        return Response({
            'success': True,
            'data': ShipmentSerializer(shipment).data
        })

    @action(detail=True, methods=['put'], url_path='amount')
    def update_amount(self, request, pk=None):
        shipment = ShippingService.update_amount(pk, _body_value(request, 'amount'))
        return Response({
            'success': True,
            'data': ShipmentSerializer(shipment).data
        })
