"""
storefront.orders.notifications

Order status emails (best-effort).

LOCKED INTENT
- The order status in the database is the source of truth; the email is advisory.
- send_status_update() never raises. Transport errors, bad addresses, and
  template problems are logged and recorded as a failed NotificationLog row.
- The mail transport is whatever EMAIL_BACKEND is configured (SMTP or an
  Anymail provider; see storefront/email_config.py). A connection can be
  injected for tests or batch sends.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Optional

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.db import DatabaseError, transaction
from django.utils import timezone
from django.utils.html import format_html

from storefront.errors import NotificationError

from .models import NotificationLog

logger = logging.getLogger(__name__)

# send_test_email renders against this id; it never matches a stored order.
SAMPLE_ORDER_ID = 0


def _from_email() -> str:
    # Prefer DEFAULT_FROM_EMAIL; fall back to SERVER_EMAIL; last resort is a safe placeholder.
    return (
        getattr(settings, "DEFAULT_FROM_EMAIL", "")
        or getattr(settings, "SERVER_EMAIL", "")
        or "no-reply@localhost"
    )


def _brand_name() -> str:
    return getattr(settings, "STOREFRONT_BRAND_NAME", "") or "Flavor Feast"


def _currency_label() -> str:
    return getattr(settings, "STOREFRONT_CURRENCY_LABEL", "") or "Rs."


def status_subject(order_id: int) -> str:
    return f"Order #{order_id} Status Update - {_brand_name()}"


class NotificationDispatcher:
    def __init__(self, connection: Optional[Any] = None):
        self.connection = connection

    def send_status_update(
        self,
        to_email: str,
        customer_name: str,
        order_id: int,
        new_status: str,
        total_amount: Optional[Decimal],
    ) -> bool:
        """
        Email the customer that their order moved to `new_status`.

        Returns True when the backend accepted the message, False otherwise.
        Never raises.
        """
        subject = status_subject(order_id)
        to_email = (to_email or "").strip()

        try:
            if not to_email:
                raise NotificationError("order has no customer email")

            msg = EmailMultiAlternatives(
                subject=subject,
                body=self._text_body(customer_name, order_id, new_status, total_amount),
                from_email=_from_email(),
                to=[to_email],
                connection=self.connection,
            )
            msg.attach_alternative(self._html_body(customer_name, order_id, new_status, total_amount), "text/html")
            msg.send(fail_silently=False)
        except Exception as e:
            logger.exception("[orders][notify] status email failed order_id=%s status=%s", order_id, new_status)
            self._record(order_id, to_email, subject, new_status, NotificationLog.STATUS_FAILED, error=str(e))
            return False

        logger.info("[orders][notify] status email sent order_id=%s status=%s", order_id, new_status)
        self._record(order_id, to_email, subject, new_status, NotificationLog.STATUS_SENT)
        return True

    # ---- composition ----

    def _text_body(self, customer_name, order_id, new_status, total_amount) -> str:
        brand = _brand_name()
        lines = [
            f"Hello {customer_name or 'there'}!",
            "",
            f"Your order #{order_id} has been {new_status}.",
        ]
        if total_amount is not None:
            lines.append(f"Total Amount: {_currency_label()} {total_amount}")
        lines += [
            "We'll notify you when your order is ready for delivery.",
            "",
            f"Thank you for choosing {brand}!",
        ]
        return "\n".join(lines)

    def _html_body(self, customer_name, order_id, new_status, total_amount) -> str:
        total_line = ""
        if total_amount is not None:
            total_line = format_html("<p>Total Amount: {} {}</p>", _currency_label(), total_amount)
        return format_html(
            """
<h2>Hello {}!</h2>
<p>Your order #{} has been <strong>{}</strong>.</p>
{}
<p>We'll notify you when your order is ready for delivery.</p>
<br>
<p>Thank you for choosing {}!</p>
""",
            customer_name or "there",
            order_id,
            new_status,
            total_line,
            _brand_name(),
        ).strip()

    # ---- audit ----

    def _record(self, order_id, to_email, subject, order_status, status, error: str = "") -> None:
        try:
            with transaction.atomic():
                NotificationLog.objects.create(
                    order_id=order_id or None,
                    to_email=to_email,
                    subject=subject[:255],
                    order_status=order_status[:32],
                    status=status,
                    error_message=(error or "")[:5000],
                    sent_at=timezone.now() if status == NotificationLog.STATUS_SENT else None,
                )
        except DatabaseError:
            logger.exception("[orders][notify] could not write notification log order_id=%s", order_id)
