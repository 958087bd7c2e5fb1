import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("menu", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="InventoryItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("stock", models.PositiveIntegerField(default=0, help_text="Units on hand.")),
                (
                    "reorder",
                    models.BooleanField(
                        default=False, help_text="Set when stock falls under the reorder threshold."
                    ),
                ),
                (
                    "storage",
                    models.CharField(
                        blank=True,
                        help_text="Where the item is stored, e.g. 'Walk-in Freezer'.",
                        max_length=50,
                    ),
                ),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "menu_item",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="inventory",
                        to="menu.menuitem",
                    ),
                ),
            ],
            options={
                "verbose_name": "Inventory Item",
                "verbose_name_plural": "Inventory Items",
                "db_table": "inventory",
                "ordering": ["menu_item_id"],
                "indexes": [models.Index(fields=["reorder"], name="inventory_reorder_idx")],
            },
        ),
    ]
