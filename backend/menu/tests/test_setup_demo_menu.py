import pytest
from io import StringIO
from django.core.management import call_command

from inventory.models import InventoryItem
from menu.models import MealType, MenuItem


@pytest.mark.django_db
class TestSetupDemoMenu:

    def test_creates_catalog_and_stock(self):
        out = StringIO()

        call_command("setup_demo_menu", stdout=out)

        assert MealType.objects.filter(name="Bowl").exists()
        assert MenuItem.objects.filter(item_type=MenuItem.ItemType.DRINK).count() == 2
        assert InventoryItem.objects.count() == MenuItem.objects.count()
        assert "Demo menu setup complete" in out.getvalue()

    def test_is_rerunnable_and_resets_stock(self):
        call_command("setup_demo_menu", stdout=StringIO())
        InventoryItem.objects.update(stock=0, reorder=True)

        call_command("setup_demo_menu", "--reset", stdout=StringIO())

        assert MealType.objects.count() == 4
        water = InventoryItem.objects.get(menu_item__name="Bottled Water")
        assert water.stock == 5
        assert water.reorder is False
