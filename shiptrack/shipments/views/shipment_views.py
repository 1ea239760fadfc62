"""
Shipment views for shipment tracking.
"""

import logging

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from ..services import ShippingService
from ..serializers import (
    ShipmentSerializer, ShipmentCreateSerializer, ShipmentTrackingSerializer
)
from ..permissions import IsShipmentOwnerOrAdmin

logger = logging.getLogger(__name__)


class ShipmentViewSet(viewsets.GenericViewSet):
    """
    Shipments owned by the authenticated user.

    Also serves the public tracking lookup, which skips authentication
    entirely.
    """

    permission_classes = [IsAuthenticated, IsShipmentOwnerOrAdmin]

    def get_serializer_class(self):
        """Return appropriate serializer based on action."""
        if self.action == 'create':
            return ShipmentCreateSerializer
        elif self.action == 'track':
            return ShipmentTrackingSerializer
        else:
            return ShipmentSerializer

    def create(self, request):
        """Create a shipment for the caller."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        shipment = ShippingService.create_shipment(request.user, serializer.validated_data)

        return Response({
            'success': True,
            'data': ShipmentSerializer(shipment).data
        }, status=status.HTTP_201_CREATED)

    def list(self, request):
        """List the caller's shipments, newest first."""
        shipments = ShippingService.list_for_user(request.user)
        serializer = ShipmentSerializer(shipments, many=True)
        return Response({
            'success': True,
            'count': len(serializer.data),
            'data': serializer.data
        })

    def retrieve(self, request, pk=None):
        """Get one shipment; owner or admin only."""
        shipment = ShippingService.get_shipment(pk)
        self.check_object_permissions(request, shipment)

        return Response({
            'success': True,
            'data': ShipmentSerializer(shipment).data
        })

    @action(
        detail=False,
        methods=['get'],
        url_path=r'track/(?P<tracking_id>[^/.]+)',
        permission_classes=[AllowAny],
        authentication_classes=[],
    )
    def track(self, request, tracking_id=None):
        """Public tracking lookup by tracking id."""
        shipment = ShippingService.get_by_tracking_id(tracking_id)
        serializer = self.get_serializer(shipment)
        return Response({
            'success': True,
            'data': serializer.data
        })
