"""
storefront.orders.workflow

Order workflow coordinator: the one place that decides the order of
authentication, role checks, store writes, and notification.

Status update runs as:

    Requested → Authenticated → Authorized → Updated → Notified (optional)

- authenticate / authorize failures are terminal; nothing is written.
- a store failure is terminal and surfaces as StoreError / OrderNotFound.
- notification is scheduled with transaction.on_commit, so it only runs once
  the status write is durable, and its outcome never changes the result.

Dependencies (token service, repository, dispatcher) are constructor
arguments; default_workflow() builds the process-wide instance once.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from functools import lru_cache, partial
from typing import Iterable, List, Optional

from django.db import transaction

from storefront.accounts.tokens import Claims, SessionTokenService, default_token_service, parse_bearer
from storefront.errors import AdminRequired, AuthError, InvalidInput

from .models import Order
from .notifications import NotificationDispatcher
from .repository import ContactInfo, LineItemDraft, OrderRepository, StatusChange

logger = logging.getLogger(__name__)

ROLE_ADMIN = "admin"


class OrderWorkflow:
    def __init__(
        self,
        *,
        tokens: SessionTokenService,
        repository: OrderRepository,
        dispatcher: NotificationDispatcher,
    ):
        self.tokens = tokens
        self.repository = repository
        self.dispatcher = dispatcher

    # ---- gates ----

    def authenticate(self, authorization: Optional[str]) -> Claims:
        """Requested → Authenticated. Raises MissingToken / InvalidToken / ExpiredToken."""
        try:
            return self.tokens.verify(parse_bearer(authorization))
        except AuthError as e:
            logger.info("[orders][auth] rejected kind=%s", type(e).__name__)
            raise

    def authorize(self, claims: Claims, role: str = ROLE_ADMIN) -> Claims:
        """Authenticated → Authorized. Raises AdminRequired."""
        if claims.role != role:
            logger.info("[orders][auth] role gate user_id=%s role=%s required=%s", claims.user_id, claims.role, role)
            raise AdminRequired()
        return claims

    # ---- operations ----

    def place_order(
        self,
        claims: Claims,
        *,
        contact: ContactInfo,
        instructions: str,
        total_amount: Decimal,
        line_items: Iterable[LineItemDraft],
    ) -> int:
        items = list(line_items)
        if not items:
            raise InvalidInput("Order must contain at least one item")

        computed = sum((item.price * item.quantity for item in items), Decimal("0"))
        if computed != total_amount:
            # Client-supplied total is stored as sent; flag it for review.
            logger.warning(
                "[orders][create] total mismatch user_id=%s submitted=%s computed=%s",
                claims.user_id, total_amount, computed,
            )

        return self.repository.create_order(claims.user_id, contact, instructions, total_amount, items)

    def list_orders(self, claims: Claims) -> List[Order]:
        self.authorize(claims)
        return self.repository.list_orders_with_items()

    def update_status(self, claims: Claims, order_id: int, status: str) -> StatusChange:
        self.authorize(claims)
        change = self.repository.update_status(order_id, status)
        transaction.on_commit(partial(self._notify, change), robust=True)
        return change

    def _notify(self, change: StatusChange) -> None:
        """Updated → Notified. Best-effort; the dispatcher never raises."""
        if not change.customer_email:
            logger.warning("[orders][notify] skipped order_id=%s (no contact snapshot)", change.order_id)
            return
        self.dispatcher.send_status_update(
            change.customer_email,
            change.customer_name,
            change.order_id,
            change.status,
            change.total_amount,
        )


@lru_cache(maxsize=1)
def default_workflow() -> OrderWorkflow:
    return OrderWorkflow(
        tokens=default_token_service(),
        repository=OrderRepository(),
        dispatcher=NotificationDispatcher(),
    )
