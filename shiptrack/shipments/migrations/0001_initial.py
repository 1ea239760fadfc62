import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models

STATUS_CHOICES = [
    ("order-received", "Order Received"),
    ("awaiting-pickup", "Awaiting Pickup"),
    ("picked-up", "Picked Up"),
    ("in-transit", "In Transit"),
    ("arrived-at-sorting-facility", "Arrived at Sorting Facility"),
    ("departed-from-sorting-facility", "Departed from Sorting Facility"),
    ("out-for-delivery", "Out for Delivery"),
    ("delivered", "Delivered"),
    ("delivery-attempted", "Delivery Attempted"),
    ("failed-delivery", "Failed Delivery"),
    ("address-issue", "Address Issue"),
    ("held-at-customs", "Held at Customs"),
    ("delayed", "Delayed"),
    ("damaged-in-transit", "Damaged in Transit"),
    ("return-initiated", "Return Initiated"),
    ("return-in-transit", "Return in Transit"),
    ("return-received", "Return Received"),
    ("refund-processed", "Refund Processed"),
    ("cancelled", "Cancelled"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Shipment",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "tracking_id",
                    models.CharField(
                        editable=False, help_text="Short public tracking identifier", max_length=8, unique=True
                    ),
                ),
                (
                    "amount",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Shipment charge",
                        max_digits=12,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                    ),
                ),
                ("source", models.JSONField(help_text="Origin address information")),
                ("destination", models.JSONField(help_text="Destination address information")),
                ("package_details", models.JSONField(help_text="Package weight, dimensions and description")),
                (
                    "status",
                    models.CharField(
                        choices=STATUS_CHOICES,
                        default="order-received",
                        help_text="Current shipment status",
                        max_length=40,
                    ),
                ),
                (
                    "payment_status",
                    models.CharField(
                        choices=[("pending", "Pending"), ("successful", "Successful")],
                        default="pending",
                        max_length=20,
                    ),
                ),
                (
                    "shipment_type",
                    models.CharField(choices=[("standard", "Standard"), ("express", "Express")], max_length=20),
                ),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "user",
                    models.ForeignKey(
                        help_text="User who owns the shipment",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="shipments",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["user", "-created_at"], name="shipments_s_user_id_5c1b0e_idx"),
                    models.Index(fields=["status", "-created_at"], name="shipments_s_status_8f2a41_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ShipmentStatusUpdate",
            fields=[
                ("id", models.BigAutoField(primary_key=True, serialize=False)),
                ("status", models.CharField(choices=STATUS_CHOICES, max_length=40)),
                ("timestamp", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "shipment",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="updated_status",
                        to="shipments.shipment",
                    ),
                ),
            ],
            options={
                "ordering": ["timestamp", "id"],
                "indexes": [
                    models.Index(fields=["shipment", "timestamp"], name="shipments_s_shipmen_3d9c72_idx"),
                ],
            },
        ),
    ]
