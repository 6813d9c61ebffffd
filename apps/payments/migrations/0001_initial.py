from __future__ import annotations

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models

import libs.idgen


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="PaymentEvent",
            fields=[
                (
                    "id",
                    models.BigIntegerField(
                        default=libs.idgen.generate_id,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("product_id", models.BigIntegerField()),
                (
                    "product_type",
                    models.CharField(
                        choices=[
                            ("course", "Course"),
                            ("webinar", "Webinar"),
                            ("testSeries", "Test series"),
                            ("test", "Test"),
                            ("liveClass", "Live class"),
                        ],
                        max_length=16,
                    ),
                ),
                ("amount_cents", models.BigIntegerField(help_text="Smallest currency unit (paise).")),
                ("currency", models.CharField(default="INR", max_length=8)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("created", "Created"),
                            ("pending", "Pending"),
                            ("authorized", "Authorized"),
                            ("succeeded", "Succeeded"),
                            ("failed", "Failed"),
                            ("refunded", "Refunded"),
                            ("cancelled", "Cancelled"),
                        ],
                        default="created",
                        max_length=16,
                    ),
                ),
                ("provider_order_id", models.CharField(blank=True, max_length=64)),
                ("provider_payment_id", models.CharField(blank=True, max_length=64)),
                ("receipt", models.CharField(blank=True, max_length=64)),
                ("occurred_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "student",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="payment_events",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-occurred_at"],
                "indexes": [models.Index(fields=["status", "occurred_at"], name="payment_status_occurred_idx")],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(amount_cents__gt=0), name="payment_amount_cents_gt_0")
                ],
            },
        ),
    ]
