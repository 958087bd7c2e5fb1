from django.contrib import admin
from .models import InventoryItem


@admin.register(InventoryItem)
class InventoryItemAdmin(admin.ModelAdmin):
    list_display = ("menu_item", "stock", "reorder", "storage", "updated_at")
    list_filter = ("reorder", "storage")
    search_fields = ("menu_item__name",)
    autocomplete_fields = ("menu_item",)

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("menu_item")
