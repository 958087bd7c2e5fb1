from django.contrib import admin
from .models import Order, Meal, MealDetail


class MealDetailInline(admin.TabularInline):
    model = MealDetail
    extra = 0
    fields = ("menu_item", "role")
    readonly_fields = ("menu_item", "role")
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


class MealInline(admin.TabularInline):
    model = Meal
    extra = 0
    fields = ("meal_type", "get_items")
    readonly_fields = ("meal_type", "get_items")
    can_delete = False

    def get_items(self, obj):
        return ", ".join(detail.menu_item.name for detail in obj.details.all())

    get_items.short_description = "Items"

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Admin configuration for the Order model.

    Prices, points and timestamps are written by the order services only.
    """

    list_display = (
        "id",
        "customer_name",
        "staff",
        "order_status",
        "rush_order",
        "get_price_formatted",
        "points_redeemed",
        "points_earned",
        "datetime",
        "completed_at",
    )
    list_filter = ("order_status", "rush_order", "datetime")
    search_fields = ("id", "customer_name", "customer__name", "customer__email", "staff__username")
    ordering = ("-datetime",)
    list_select_related = ("customer", "staff")
    inlines = [MealInline]
    readonly_fields = (
        "price",
        "subtotal",
        "points_redeemed",
        "points_earned",
        "points_awarded_at",
        "datetime",
        "completed_at",
        "updated_at",
    )

    def get_price_formatted(self, obj):
        return f"${obj.price:,.2f}"

    get_price_formatted.short_description = "Price"
    get_price_formatted.admin_order_field = "price"


@admin.register(Meal)
class MealAdmin(admin.ModelAdmin):
    list_display = ("id", "order", "meal_type")
    list_select_related = ("order", "meal_type")
    inlines = [MealDetailInline]
