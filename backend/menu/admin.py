from django.contrib import admin
from .models import MealType, MenuItem


@admin.register(MealType)
class MealTypeAdmin(admin.ModelAdmin):
    list_display = ("name", "price", "entree_count", "side_count", "drink_size")
    search_fields = ("name",)


@admin.register(MenuItem)
class MenuItemAdmin(admin.ModelAdmin):
    list_display = ("name", "item_type", "upcharge", "is_available")
    list_filter = ("item_type", "is_available")
    search_fields = ("name",)
