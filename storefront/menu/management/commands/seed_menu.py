from decimal import Decimal

from django.core.management.base import BaseCommand

from storefront.menu.models import MenuItem

SAMPLE_ITEMS = [
    {"name": "Classic Burger", "category": "burgers", "price": Decimal("250.00"), "description": "Beef patty, cheddar, pickles."},
    {"name": "Chicken Burger", "category": "burgers", "price": Decimal("220.00"), "description": "Crispy chicken thigh, slaw."},
    {"name": "Margherita Pizza", "category": "pizza", "price": Decimal("450.00"), "description": "Tomato, mozzarella, basil."},
    {"name": "French Fries", "category": "sides", "price": Decimal("120.00"), "description": "Salted, golden and crisp."},
    {"name": "Cola", "category": "drinks", "price": Decimal("80.00"), "description": "Chilled 330ml can."},
    {"name": "Chocolate Brownie", "category": "desserts", "price": Decimal("150.00"), "description": "Warm, with fudge sauce."},
]


class Command(BaseCommand):
    help = "Insert sample menu items for local development (skips names that already exist)."

    def handle(self, *args, **options):
        created_items = []
        for item in SAMPLE_ITEMS:
            obj, created = MenuItem.objects.get_or_create(name=item["name"], defaults=item)
            if created:
                created_items.append(obj.name)

        self.stdout.write(self.style.SUCCESS(f"Seeded {len(created_items)} new items."))
        for name in created_items:
            self.stdout.write(f"  + {name}")
