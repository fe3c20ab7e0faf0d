from decimal import Decimal

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError, CommandParser

from storefront.orders.models import Order
from storefront.orders.notifications import SAMPLE_ORDER_ID, NotificationDispatcher


class Command(BaseCommand):
    help = (
        "Send an order status email through the storefront notifier to check the "
        "EMAIL_BACKEND / provider config. Uses a sample order unless --order is given."
    )

    def add_arguments(self, parser: CommandParser) -> None:
        parser.add_argument("to_email", help="Address to send the status email to.")
        parser.add_argument("--order", type=int, help="Render this order's name, status and total instead of the sample.")
        parser.add_argument("--status", default="confirmed", help="Status shown in the sample email.")

    def handle(self, *args, **options):
        to_email = options["to_email"]
        order_id, name, status, total = SAMPLE_ORDER_ID, "Test Customer", options["status"], Decimal("0.00")

        if options["order"]:
            order = (
                Order.objects.filter(pk=options["order"])
                .values("customer_name", "status", "total_amount")
                .first()
            )
            if order is None:
                raise CommandError(f"No order #{options['order']}")
            order_id, name, status, total = options["order"], order["customer_name"], order["status"], order["total_amount"]

        self.stdout.write(self.style.NOTICE(f"EMAIL_BACKEND = {settings.EMAIL_BACKEND}"))
        self.stdout.write(self.style.NOTICE(f"DEFAULT_FROM_EMAIL = {getattr(settings, 'DEFAULT_FROM_EMAIL', '')}"))

        if not NotificationDispatcher().send_status_update(to_email, name, order_id, status, total):
            raise CommandError(f"FAILED • could not send to {to_email} (see NotificationLog and logs/storefront.log)")
        self.stdout.write(self.style.SUCCESS(f"OK • Sent order #{order_id} status email to {to_email}"))
