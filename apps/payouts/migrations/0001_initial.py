from __future__ import annotations

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models

import apps.payouts.models
import libs.idgen


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("educators", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Payout",
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
                ("month", models.PositiveSmallIntegerField(help_text="1-12")),
                ("year", models.PositiveSmallIntegerField()),
                ("period_key", models.CharField(max_length=64, unique=True)),
                ("gross_cents", models.BigIntegerField(default=0, help_text="Smallest currency unit (paise).")),
                ("commission_cents", models.BigIntegerField(default=0)),
                ("amount_cents", models.BigIntegerField(default=0, help_text="Payable: gross minus commission.")),
                ("currency", models.CharField(default=apps.payouts.models.default_currency, max_length=8)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("processing", "Processing"),
                            ("paid", "Paid"),
                            ("failed", "Failed"),
                            ("reversed", "Reversed"),
                        ],
                        default="pending",
                        max_length=16,
                    ),
                ),
                ("idempotency_key", models.CharField(blank=True, max_length=64, null=True, unique=True)),
                ("external_payout_id", models.CharField(blank=True, db_index=True, max_length=64)),
                ("narration", models.CharField(blank=True, max_length=30)),
                ("scheduled_date", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "educator",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payouts",
                        to="educators.educator",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["year", "month", "status"], name="payout_period_status_idx")],
                "constraints": [
                    models.UniqueConstraint(fields=("educator", "month", "year"), name="payout_unique_educator_period"),
                    models.CheckConstraint(
                        condition=models.Q(amount_cents=models.F("gross_cents") - models.F("commission_cents")),
                        name="payout_amount_is_gross_minus_commission",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(gross_cents__gte=0, commission_cents__gte=0),
                        name="payout_amounts_non_negative",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(month__gte=1, month__lte=12),
                        name="payout_month_range",
                    ),
                ],
            },
        ),
    ]
