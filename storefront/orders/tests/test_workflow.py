"""
Workflow ordering: gates before writes, notification only after commit.
"""

from __future__ import annotations

from decimal import Decimal
from unittest import mock

from django.test import TestCase

from storefront.accounts.models import Account
from storefront.accounts.tokens import Claims, SessionTokenService
from storefront.errors import AdminRequired, InvalidInput, MissingToken, OrderNotFound
from storefront.orders.models import Order
from storefront.orders.repository import ContactInfo, LineItemDraft, OrderRepository
from storefront.orders.workflow import OrderWorkflow


class OrderWorkflowTests(TestCase):
    def setUp(self):
        self.dispatcher = mock.Mock()
        self.tokens = SessionTokenService("workflow-test-secret")
        self.workflow = OrderWorkflow(tokens=self.tokens, repository=OrderRepository(), dispatcher=self.dispatcher)

        account = Account.objects.create(name="Bob", email="bob@x.com", password="!")
        self.customer = Claims(user_id=account.id, email=account.email, role="customer")
        self.admin = Claims(user_id=account.id, email="boss@x.com", role="admin")

    def _place(self):
        return self.workflow.place_order(
            self.customer,
            contact=ContactInfo(name="Bob", email="bob@x.com"),
            instructions="",
            total_amount=Decimal("10.00"),
            line_items=[LineItemDraft(1, 2, Decimal("5.00"))],
        )

    def test_authenticate_reads_bearer_header(self):
        token = self.tokens.issue(7, "a@x.com", "admin")
        claims = self.workflow.authenticate(f"Bearer {token}")
        self.assertEqual(claims.user_id, 7)

    def test_authenticate_without_header(self):
        with self.assertRaises(MissingToken):
            self.workflow.authenticate(None)

    def test_place_order_rejects_empty_items(self):
        with self.assertRaises(InvalidInput):
            self.workflow.place_order(
                self.customer,
                contact=ContactInfo(name="Bob", email="bob@x.com"),
                instructions="",
                total_amount=Decimal("0"),
                line_items=[],
            )

    def test_non_admin_update_writes_nothing(self):
        order_id = self._place()
        with self.captureOnCommitCallbacks(execute=True) as callbacks:
            with self.assertRaises(AdminRequired):
                self.workflow.update_status(self.customer, order_id, "ready")
        self.assertEqual(callbacks, [])
        self.assertEqual(Order.objects.get(pk=order_id).status, "pending")
        self.dispatcher.send_status_update.assert_not_called()

    def test_non_admin_cannot_list(self):
        with self.assertRaises(AdminRequired):
            self.workflow.list_orders(self.customer)

    def test_notification_waits_for_commit(self):
        order_id = self._place()
        with self.captureOnCommitCallbacks(execute=False) as callbacks:
            self.workflow.update_status(self.admin, order_id, "ready")
            self.dispatcher.send_status_update.assert_not_called()

        self.assertEqual(len(callbacks), 1)
        callbacks[0]()
        self.dispatcher.send_status_update.assert_called_once_with(
            "bob@x.com", "Bob", order_id, "ready", Decimal("10.00")
        )

    def test_unknown_order_schedules_nothing(self):
        with self.captureOnCommitCallbacks(execute=True) as callbacks:
            with self.assertRaises(OrderNotFound):
                self.workflow.update_status(self.admin, 999, "ready")
        self.assertEqual(callbacks, [])
        self.dispatcher.send_status_update.assert_not_called()
