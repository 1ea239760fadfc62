"""
URL configuration for the shiptrack project.

Every API route lives under ``/api`` without a trailing slash.
"""
from django.contrib import admin
from django.urls import path, include
from rest_framework.routers import DefaultRouter

# Import API ViewSets
from authentication.api_views import AdminUserViewSet, create_admin
from shipments.views import ShipmentViewSet, AdminShipmentViewSet

# Create API router
router = DefaultRouter(trailing_slash=False)

# Shipments API
router.register(r'shipments', ShipmentViewSet, basename='api-shipments')

# Admin API
router.register(r'admin/shipments', AdminShipmentViewSet, basename='api-admin-shipments')
router.register(r'admin/users', AdminUserViewSet, basename='api-admin-users')

urlpatterns = [
    # Operator interface
    path("django-admin/", admin.site.urls),

    # API endpoints
    path('api/auth/', include('authentication.urls')),
    path('api/admin/create', create_admin, name='api-admin-create'),
    path('api/', include(router.urls)),
]
