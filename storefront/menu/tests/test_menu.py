from decimal import Decimal
from io import StringIO

from django.core.management import call_command
from django.test import Client, TestCase

from storefront.menu.management.commands.seed_menu import SAMPLE_ITEMS
from storefront.menu.models import MenuItem


class MenuListTests(TestCase):
    def setUp(self):
        self.client = Client()
        MenuItem.objects.create(name="Classic Burger", category="burgers", price=Decimal("250.00"))
        MenuItem.objects.create(name="Cola", category="drinks", price=Decimal("80.00"))
        MenuItem.objects.create(name="Seasonal Pie", category="desserts", price=Decimal("300.00"), is_available=False)

    def test_lists_only_available_items(self):
        r = self.client.get("/api/menu")
        self.assertEqual(r.status_code, 200)
        names = [item["name"] for item in r.json()]
        self.assertEqual(names, ["Classic Burger", "Cola"])

    def test_no_token_needed(self):
        r = self.client.get("/api/menu", HTTP_AUTHORIZATION="Bearer garbage")
        self.assertEqual(r.status_code, 200)

    def test_price_is_numeric(self):
        item = self.client.get("/api/menu").json()[0]
        self.assertEqual(item["price"], 250.0)
        self.assertEqual(
            set(item),
            {"id", "name", "description", "category", "price", "image_url", "is_available"},
        )


class SeedMenuCommandTests(TestCase):
    def test_seed_is_idempotent(self):
        out = StringIO()
        call_command("seed_menu", stdout=out)
        self.assertEqual(MenuItem.objects.count(), len(SAMPLE_ITEMS))
        self.assertIn(f"Seeded {len(SAMPLE_ITEMS)} new items.", out.getvalue())

        out = StringIO()
        call_command("seed_menu", stdout=out)
        self.assertEqual(MenuItem.objects.count(), len(SAMPLE_ITEMS))
        self.assertIn("Seeded 0 new items.", out.getvalue())
