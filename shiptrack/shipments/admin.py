"""
Django admin configuration for shipment tracking.
"""

from django.contrib import admin
from .models import Shipment, ShipmentStatusUpdate


class ShipmentStatusUpdateInline(admin.TabularInline):
    model = ShipmentStatusUpdate
    extra = 0
    readonly_fields = ['status', 'timestamp']
    can_delete = False


@admin.register(Shipment)
class ShipmentAdmin(admin.ModelAdmin):
    list_display = ['tracking_id', 'user', 'status', 'payment_status', 'shipment_type', 'amount', 'created_at']
    list_filter = ['status', 'payment_status', 'shipment_type', 'created_at']
    search_fields = ['tracking_id', 'user__email', 'user__name']
    readonly_fields = ['id', 'tracking_id', 'created_at', 'updated_at']
    inlines = [ShipmentStatusUpdateInline]
