from django.db import models


class MenuItem(models.Model):
    CATEGORY_CHOICES = [
        ("burgers", "Burgers"),
        ("pizza", "Pizza"),
        ("sides", "Sides"),
        ("drinks", "Drinks"),
        ("desserts", "Desserts"),
        ("other", "Other"),
    ]

    name = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES, default="other")
    price = models.DecimalField(max_digits=10, decimal_places=2)
    image_url = models.CharField(max_length=500, blank=True)
    is_available = models.BooleanField(default=True, db_index=True)

    class Meta:
        ordering = ("category", "name")

    def __str__(self):
        return f"{self.name} - {self.price}"
