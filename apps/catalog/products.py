from __future__ import annotations

import logging
from typing import ClassVar, Dict, Optional, Type

from django.db import DatabaseError, models

from apps.catalog.models import Course, Test, TestSeries, Webinar
from apps.payments.models import ProductType

logger = logging.getLogger(__name__)


class ProductKind:
    """One sellable product kind; resolves ownership, price and availability."""

    product_type: ClassVar[str]
    model: ClassVar[Type[models.Model]]

    def _get(self, product_id: int) -> Optional[models.Model]:
        return self.model.objects.filter(pk=product_id).first()

    def resolve_owner(self, product_id: int) -> Optional[int]:
        product = self._get(product_id)
        return product.educator_id if product is not None else None

    def price(self, product_id: int) -> Optional[int]:
        product = self._get(product_id)
        return product.price_cents if product is not None else None

    def is_active(self, product_id: int) -> bool:
        product = self._get(product_id)
        return bool(product is not None and product.is_active)


class CourseKind(ProductKind):
    product_type = ProductType.COURSE
    model = Course


class WebinarKind(ProductKind):
    product_type = ProductType.WEBINAR
    model = Webinar


class TestSeriesKind(ProductKind):
    product_type = ProductType.TEST_SERIES
    model = TestSeries


class TestKind(ProductKind):
    product_type = ProductType.TEST
    model = Test


PRODUCT_KINDS: Dict[str, ProductKind] = {
    kind.product_type: kind for kind in (CourseKind(), WebinarKind(), TestSeriesKind(), TestKind())
}


def get_product_kind(product_type: str) -> Optional[ProductKind]:
    return PRODUCT_KINDS.get(str(product_type or ""))


def resolve_owner(product_id: int, product_type: str) -> Optional[int]:
    """
    Return the owning educator id, or None when the product kind is unknown,
    the product is missing, or the catalog lookup fails.
    """
    kind = get_product_kind(product_type)
    if kind is None:
        logger.debug("No product kind registered for %s", product_type)
        return None
    try:
        owner_id = kind.resolve_owner(product_id)
    except (DatabaseError, ValueError, TypeError):
        logger.warning(
            "Product owner lookup failed",
            extra={"product_id": product_id, "product_type": product_type},
            exc_info=True,
        )
        return None
    if owner_id is None:
        logger.debug("Product %s (%s) not found", product_id, product_type)
    return owner_id
