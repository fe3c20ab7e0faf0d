"""
storefront.orders.repository

Order persistence over the Django ORM.

- create_order: order row + every line-item row in ONE atomic block. A failure
  on the item insert rolls the order row back; callers never see a half order.
- list_orders_with_items: two queries total (orders, then items IN (...)),
  grouped in memory. No orders → no second query.
- update_status: single UPDATE; zero rows → OrderNotFound. A second read
  returns the contact snapshot the notification needs.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from django.db import DatabaseError, transaction
from django.db.models import F
from django.utils import timezone

from storefront.errors import InvalidInput, OrderNotFound, StoreError

from .models import Order, OrderItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContactInfo:
    name: str
    email: str
    phone: str = ""


@dataclass(frozen=True)
class LineItemDraft:
    menu_item_id: int
    quantity: int
    price: Decimal


@dataclass(frozen=True)
class StatusChange:
    """Result of a status update: the new status plus who to tell about it."""

    order_id: int
    status: str
    customer_email: Optional[str]
    customer_name: str
    total_amount: Optional[Decimal]


class OrderRepository:
    def create_order(
        self,
        user_id: int,
        contact: ContactInfo,
        instructions: str,
        total_amount: Decimal,
        line_items: Iterable[LineItemDraft],
    ) -> int:
        items = list(line_items)
        if not items:
            raise InvalidInput("Order must contain at least one item")

        try:
            with transaction.atomic():
                order = Order.objects.create(
                    user_id=user_id,
                    customer_name=contact.name,
                    customer_email=contact.email,
                    customer_phone=contact.phone or "",
                    special_instructions=instructions or "",
                    total_amount=total_amount,
                )
                OrderItem.objects.bulk_create(
                    [
                        OrderItem(
                            order=order,
                            menu_item_id=item.menu_item_id,
                            quantity=item.quantity,
                            price=item.price,
                        )
                        for item in items
                    ]
                )
        except DatabaseError as e:
            logger.exception("[orders][create] rolled back user_id=%s items=%s", user_id, len(items))
            raise StoreError() from e

        logger.info("[orders][create] order_id=%s user_id=%s items=%s", order.id, user_id, len(items))
        return order.id

    def list_orders_with_items(self) -> List[Order]:
        try:
            orders = list(
                Order.objects.annotate(user_name=F("user__name")).order_by("-created_at", "-id")
            )
            if not orders:
                return []

            items_by_order: Dict[int, List[OrderItem]] = defaultdict(list)
            items = (
                OrderItem.objects.filter(order_id__in=[o.id for o in orders])
                .annotate(item_name=F("menu_item__name"))
                .order_by("id")
            )
            for item in items:
                items_by_order[item.order_id].append(item)
        except DatabaseError as e:
            logger.exception("[orders][list] store failure")
            raise StoreError() from e

        for order in orders:
            order.line_items = items_by_order.get(order.id, [])
        return orders

    def update_status(self, order_id: int, status: str) -> StatusChange:
        try:
            updated = Order.objects.filter(pk=order_id).update(status=status, updated_at=timezone.now())
            if not updated:
                raise OrderNotFound()
            snapshot = (
                Order.objects.filter(pk=order_id)
                .values("customer_email", "customer_name", "total_amount")
                .first()
            )
        except DatabaseError as e:
            logger.exception("[orders][status] store failure order_id=%s", order_id)
            raise StoreError() from e

        logger.info("[orders][status] order_id=%s status=%s", order_id, status)
        snapshot = snapshot or {}
        return StatusChange(
            order_id=order_id,
            status=status,
            customer_email=snapshot.get("customer_email"),
            customer_name=snapshot.get("customer_name") or "",
            total_amount=snapshot.get("total_amount"),
        )
