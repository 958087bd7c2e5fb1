from rest_framework import serializers
from .models import InventoryItem


class InventoryItemSerializer(serializers.ModelSerializer):
    menu_item_id = serializers.IntegerField(source="menu_item.id", read_only=True)
    name = serializers.CharField(source="menu_item.name", read_only=True)
    item_type = serializers.CharField(source="menu_item.item_type", read_only=True)

    class Meta:
        model = InventoryItem
        fields = ["id", "menu_item_id", "name", "item_type", "stock", "reorder", "storage", "updated_at"]
        read_only_fields = fields
