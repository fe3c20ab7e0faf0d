import smtplib
from decimal import Decimal
from io import StringIO
from unittest import mock

from django.core import mail
from django.core.mail import EmailMultiAlternatives
from django.core.management import CommandError, call_command
from django.test import TestCase, override_settings

from storefront.accounts.models import Account
from storefront.orders.models import NotificationLog, Order
from storefront.orders.notifications import NotificationDispatcher, status_subject


class BrokenConnection:
    def send_messages(self, messages):
        raise smtplib.SMTPServerDisconnected("connection dropped")


class NotificationDispatcherTests(TestCase):
    def setUp(self):
        account = Account.objects.create(name="Bob", email="bob@x.com", password="!")
        self.order = Order.objects.create(
            user=account,
            customer_name="Bob",
            customer_email="bob@x.com",
            total_amount=Decimal("10.00"),
        )

    def test_sends_text_and_html(self):
        ok = NotificationDispatcher().send_status_update("bob@x.com", "Bob", self.order.id, "ready", Decimal("10.00"))
        self.assertTrue(ok)
        self.assertEqual(len(mail.outbox), 1)

        msg = mail.outbox[0]
        self.assertEqual(msg.subject, status_subject(self.order.id))
        self.assertIn("Hello Bob!", msg.body)
        self.assertIn(f"Your order #{self.order.id} has been ready.", msg.body)
        self.assertIn("Thank you for choosing Flavor Feast!", msg.body)

        html, mimetype = msg.alternatives[0]
        self.assertEqual(mimetype, "text/html")
        self.assertIn("<strong>ready</strong>", html)

        log = NotificationLog.objects.get()
        self.assertEqual(log.status, NotificationLog.STATUS_SENT)
        self.assertIsNotNone(log.sent_at)

    def test_html_escapes_customer_values(self):
        NotificationDispatcher().send_status_update(
            "bob@x.com", "<script>x</script>", self.order.id, "<b>ready</b>", Decimal("10.00")
        )
        html, _ = mail.outbox[0].alternatives[0]
        self.assertNotIn("<script>", html)
        self.assertIn("&lt;script&gt;", html)
        self.assertIn("&lt;b&gt;ready&lt;/b&gt;", html)

    @override_settings(STOREFRONT_BRAND_NAME="Night Kitchen", STOREFRONT_CURRENCY_LABEL="$")
    def test_brand_and_currency_follow_settings(self):
        NotificationDispatcher().send_status_update("bob@x.com", "Bob", self.order.id, "ready", Decimal("3.50"))
        msg = mail.outbox[0]
        self.assertEqual(msg.subject, f"Order #{self.order.id} Status Update - Night Kitchen")
        self.assertIn("Total Amount: $ 3.50", msg.body)

    def test_transport_failure_is_recorded_not_raised(self):
        dispatcher = NotificationDispatcher(connection=BrokenConnection())
        with self.assertLogs("storefront.orders.notifications", level="ERROR"):
            ok = dispatcher.send_status_update("bob@x.com", "Bob", self.order.id, "ready", Decimal("10.00"))
        self.assertFalse(ok)

        log = NotificationLog.objects.get()
        self.assertEqual(log.status, NotificationLog.STATUS_FAILED)
        self.assertIn("connection dropped", log.error_message)
        self.assertIsNone(log.sent_at)

    def test_blank_address_is_a_failed_send(self):
        ok = NotificationDispatcher().send_status_update("  ", "Bob", self.order.id, "ready", None)
        self.assertFalse(ok)
        self.assertEqual(mail.outbox, [])
        self.assertEqual(NotificationLog.objects.get().status, NotificationLog.STATUS_FAILED)


class SendTestEmailCommandTests(TestCase):
    def test_sample_email_goes_through_the_notifier(self):
        out = StringIO()
        call_command("send_test_email", "ops@x.com", stdout=out)

        self.assertEqual(len(mail.outbox), 1)
        msg = mail.outbox[0]
        self.assertEqual(msg.to, ["ops@x.com"])
        self.assertEqual(msg.subject, "Order #0 Status Update - Flavor Feast")
        self.assertIn("has been confirmed", msg.body)
        self.assertIn("OK • Sent order #0 status email to ops@x.com", out.getvalue())

        log = NotificationLog.objects.get()
        self.assertIsNone(log.order_id)
        self.assertEqual(log.status, NotificationLog.STATUS_SENT)

    def test_renders_a_stored_order(self):
        account = Account.objects.create(name="Bob", email="bob@x.com", password="!")
        order = Order.objects.create(
            user=account,
            customer_name="Bob",
            customer_email="bob@x.com",
            total_amount=Decimal("42.00"),
            status="preparing",
        )
        call_command("send_test_email", "ops@x.com", "--order", str(order.id), stdout=StringIO())

        msg = mail.outbox[0]
        self.assertEqual(msg.subject, status_subject(order.id))
        self.assertIn("Hello Bob!", msg.body)
        self.assertIn("has been preparing", msg.body)
        self.assertIn("Rs. 42.00", msg.body)
        self.assertEqual(NotificationLog.objects.get().order_id, order.id)

    def test_unknown_order_fails(self):
        with self.assertRaises(CommandError):
            call_command("send_test_email", "ops@x.com", "--order", "9999", stdout=StringIO())
        self.assertEqual(mail.outbox, [])

    def test_transport_failure_fails_the_command(self):
        with mock.patch.object(EmailMultiAlternatives, "send", side_effect=smtplib.SMTPException("relay down")):
            with self.assertRaises(CommandError):
                call_command("send_test_email", "ops@x.com", stdout=StringIO())
        self.assertEqual(NotificationLog.objects.get().status, NotificationLog.STATUS_FAILED)
