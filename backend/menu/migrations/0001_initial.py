from decimal import Decimal
import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="MealType",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100, unique=True)),
                (
                    "price",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Base price of the meal before item upcharges.",
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                    ),
                ),
                ("entree_count", models.PositiveSmallIntegerField(default=1)),
                ("side_count", models.PositiveSmallIntegerField(default=1)),
                ("drink_size", models.CharField(blank=True, default="", max_length=20)),
            ],
            options={
                "verbose_name": "Meal Type",
                "verbose_name_plural": "Meal Types",
                "db_table": "meal_types",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="MenuItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100)),
                (
                    "item_type",
                    models.CharField(
                        choices=[("entree", "Entree"), ("side", "Side"), ("drink", "Drink")],
                        max_length=10,
                    ),
                ),
                (
                    "upcharge",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Price added on top of the meal type's base price.",
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                    ),
                ),
                ("is_available", models.BooleanField(default=True)),
            ],
            options={
                "verbose_name": "Menu Item",
                "verbose_name_plural": "Menu Items",
                "db_table": "menu_items",
                "ordering": ["id"],
                "indexes": [models.Index(fields=["item_type", "is_available"], name="menu_items_type_avail_idx")],
            },
        ),
    ]
