"""
storefront.orders.models

Order + OrderItem are written together (see repository.create_order); after
creation only Order.status changes. NotificationLog is the audit trail for
status emails.
"""

from __future__ import annotations

from django.db import models
from django.utils import timezone


class Order(models.Model):
    # Open set (pending, confirmed, preparing, ready, delivered, cancelled, ...);
    # no transition graph is enforced.
    STATUS_PENDING = "pending"

    user = models.ForeignKey(
        "accounts.Account",
        on_delete=models.CASCADE,
        related_name="orders",
    )

    # Contact for this order; may differ from the account (delivery for someone else).
    customer_name = models.CharField(max_length=120)
    customer_email = models.EmailField()
    customer_phone = models.CharField(max_length=30, blank=True, default="")
    special_instructions = models.TextField(blank=True, default="")

    # Client-supplied at checkout.
    total_amount = models.DecimalField(max_digits=10, decimal_places=2)

    status = models.CharField(max_length=32, default=STATUS_PENDING, db_index=True)

    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("-created_at", "-id")

    def __str__(self) -> str:
        return f"Order #{self.id} - {self.customer_name} - {self.status}"


class OrderItem(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")

    # Reference only: not checked against the menu at write time, and no FK constraint.
    menu_item = models.ForeignKey(
        "menu.MenuItem",
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        null=True,
        related_name="+",
    )
    quantity = models.PositiveIntegerField()
    # Unit price snapshot at order time.
    price = models.DecimalField(max_digits=10, decimal_places=2)

    class Meta:
        ordering = ("id",)

    def __str__(self) -> str:
        return f"{self.quantity} × item {self.menu_item_id} @ {self.price}"


class NotificationLog(models.Model):
    """
    Record of an attempted status email.

    Internal audit trail only; the API never reports notification outcome.
    """

    order = models.ForeignKey(
        Order,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="notification_logs",
    )

    to_email = models.EmailField()
    subject = models.CharField(max_length=255)
    order_status = models.CharField(max_length=32, blank=True, default="")

    STATUS_SENT = "sent"
    STATUS_FAILED = "failed"
    STATUS_CHOICES = [
        (STATUS_SENT, "Sent"),
        (STATUS_FAILED, "Failed"),
    ]
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, db_index=True)
    error_message = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(default=timezone.now, editable=False)
    sent_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"order #{self.order_id} → {self.to_email} ({self.status})"
