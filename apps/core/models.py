from __future__ import annotations

from django.db import models

from libs.idgen import generate_id


class BaseModel(models.Model):
    """Snowflake primary key plus created/updated timestamps."""

    id = models.BigIntegerField(primary_key=True, default=generate_id, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
