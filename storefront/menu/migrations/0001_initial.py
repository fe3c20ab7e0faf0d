from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="MenuItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100)),
                ("description", models.TextField(blank=True)),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("burgers", "Burgers"),
                            ("pizza", "Pizza"),
                            ("sides", "Sides"),
                            ("drinks", "Drinks"),
                            ("desserts", "Desserts"),
                            ("other", "Other"),
                        ],
                        default="other",
                        max_length=20,
                    ),
                ),
                ("price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("image_url", models.CharField(blank=True, max_length=500)),
                ("is_available", models.BooleanField(db_index=True, default=True)),
            ],
            options={
                "ordering": ("category", "name"),
            },
        ),
    ]
