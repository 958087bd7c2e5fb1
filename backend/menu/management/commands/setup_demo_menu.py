"""
Django management command to set up a demo catalog with stock.
This helps exercise ordering, completion and the inventory reports locally.
"""
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from inventory.models import InventoryItem
from menu.models import MealType, MenuItem

DEMO_MEAL_TYPES = [
    # name, price, entrees, sides, drink size
    ("Bowl", Decimal("8.30"), 1, 1, ""),
    ("Plate", Decimal("9.80"), 2, 1, ""),
    ("Bigger Plate", Decimal("11.30"), 3, 1, ""),
    ("Family Meal", Decimal("43.00"), 3, 2, "large"),
]

DEMO_MENU_ITEMS = [
    # name, type, upcharge, stock, storage
    ("Orange Chicken", MenuItem.ItemType.ENTREE, Decimal("0.00"), 120, "Walk-in Freezer"),
    ("Beijing Beef", MenuItem.ItemType.ENTREE, Decimal("0.00"), 80, "Walk-in Freezer"),
    ("Honey Walnut Shrimp", MenuItem.ItemType.ENTREE, Decimal("1.50"), 25, "Walk-in Freezer"),
    ("Black Pepper Angus Steak", MenuItem.ItemType.ENTREE, Decimal("1.50"), 8, "Walk-in Freezer"),
    ("Chow Mein", MenuItem.ItemType.SIDE, Decimal("0.00"), 150, "Dry Storage"),
    ("Fried Rice", MenuItem.ItemType.SIDE, Decimal("0.00"), 150, "Dry Storage"),
    ("Super Greens", MenuItem.ItemType.SIDE, Decimal("0.00"), 15, "Walk-in Cooler"),
    ("Fountain Drink", MenuItem.ItemType.DRINK, Decimal("2.10"), 500, "Front Counter"),
    ("Bottled Water", MenuItem.ItemType.DRINK, Decimal("2.30"), 5, "Front Counter"),
]


class Command(BaseCommand):
    help = 'Set up a demo menu (meal types, menu items and inventory)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--reset',
            action='store_true',
            help='Reset stock levels of existing demo items',
        )

    def handle(self, *args, **options):
        self.stdout.write(self.style.SUCCESS('Setting up demo menu...'))

        with transaction.atomic():
            for name, price, entrees, sides, drink_size in DEMO_MEAL_TYPES:
                MealType.objects.update_or_create(
                    name=name,
                    defaults={
                        'price': price,
                        'entree_count': entrees,
                        'side_count': sides,
                        'drink_size': drink_size,
                    },
                )
                self.stdout.write(f'  ✓ Meal type {name}: ${price}')

            for name, item_type, upcharge, stock, storage in DEMO_MENU_ITEMS:
                menu_item, _ = MenuItem.objects.update_or_create(
                    name=name,
                    item_type=item_type,
                    defaults={'upcharge': upcharge, 'is_available': True},
                )
                inventory, created = InventoryItem.objects.get_or_create(
                    menu_item=menu_item,
                    defaults={'stock': stock, 'storage': storage},
                )
                if options['reset'] and not created:
                    inventory.stock = stock
                    inventory.reorder = False
                    inventory.save(update_fields=['stock', 'reorder', 'updated_at'])

                self.stdout.write(f'  ✓ {name} ({item_type}): {inventory.stock} units')

        low_stock_count = InventoryItem.objects.filter(stock__lt=10).count()
        self.stdout.write(self.style.SUCCESS('\nDemo menu setup complete!'))
        self.stdout.write(f'  - Meal types: {MealType.objects.count()}')
        self.stdout.write(f'  - Menu items: {MenuItem.objects.count()}')
        self.stdout.write(f'  - Low stock items: {low_stock_count}')
