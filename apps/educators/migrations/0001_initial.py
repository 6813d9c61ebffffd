from __future__ import annotations

import django.db.models.deletion
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
            name="Educator",
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
                ("full_name", models.CharField(max_length=160)),
                ("email", models.EmailField(max_length=254, unique=True)),
                ("mobile_number", models.CharField(blank=True, max_length=20)),
                ("bank_account_holder_name", models.CharField(blank=True, max_length=160)),
                ("bank_account_number", models.CharField(blank=True, max_length=34)),
                ("bank_ifsc_code", models.CharField(blank=True, max_length=11)),
                ("bank_name", models.CharField(blank=True, max_length=120)),
                ("external_contact_id", models.CharField(blank=True, max_length=64)),
                ("external_fund_account_id", models.CharField(blank=True, max_length=64)),
                (
                    "user",
                    models.OneToOneField(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="educator_profile",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={"ordering": ["full_name"]},
        ),
    ]
