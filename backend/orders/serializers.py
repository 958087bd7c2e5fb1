from rest_framework import serializers

from orders.calculators import OrderItemSelection
from orders.models import Order, Meal, MealDetail
from orders.services import KitchenService


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------

class MealTypeRefSerializer(serializers.Serializer):
    meal_type_id = serializers.IntegerField(min_value=1)


class MenuItemRefSerializer(serializers.Serializer):
    menu_item_id = serializers.IntegerField(min_value=1)


class OrderItemInputSerializer(serializers.Serializer):
    """
    One cart line as submitted by the kiosk / cashier UI:
    ``{"mealType": {...}, "entrees": [...], "sides": [...], "drink": {...}}``
    """

    mealType = MealTypeRefSerializer()
    entrees = MenuItemRefSerializer(many=True, required=False, default=list)
    sides = MenuItemRefSerializer(many=True, required=False, default=list)
    drink = MenuItemRefSerializer(required=False, allow_null=True, default=None)

    def to_selection(self, data) -> OrderItemSelection:
        drink = data.get("drink")
        return OrderItemSelection(
            meal_type_id=data["mealType"]["meal_type_id"],
            entree_ids=tuple(entree["menu_item_id"] for entree in data.get("entrees", [])),
            side_ids=tuple(side["menu_item_id"] for side in data.get("sides", [])),
            drink_id=drink["menu_item_id"] if drink else None,
        )


class OrderCreateSerializer(serializers.Serializer):
    order_items = OrderItemInputSerializer(many=True, allow_empty=False)
    customer_name = serializers.CharField(
        max_length=150, required=False, allow_blank=True, allow_null=True
    )
    customerId = serializers.UUIDField(required=False, allow_null=True)
    pointsApplied = serializers.IntegerField(min_value=0, required=False, default=0)
    rush_order = serializers.BooleanField(required=False, default=False)

    def get_selections(self):
        """Validated order items as pricing selections."""
        item_serializer = OrderItemInputSerializer()
        return [
            item_serializer.to_selection(item)
            for item in self.validated_data["order_items"]
        ]


class UpdateOrderStatusSerializer(serializers.Serializer):
    """
    Serializer specifically for validating an order status change request.
    Transition rules are enforced by OrderStatusService.
    """

    status = serializers.ChoiceField(choices=Order.OrderStatus.choices)


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

class MealDetailSerializer(serializers.ModelSerializer):
    menu_item_id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(source="menu_item.name", read_only=True)

    class Meta:
        model = MealDetail
        fields = ["id", "menu_item_id", "name", "role"]


class MealSerializer(serializers.ModelSerializer):
    meal_id = serializers.IntegerField(source="id", read_only=True)
    meal_type_id = serializers.IntegerField(read_only=True)
    meal_type_name = serializers.CharField(source="meal_type.name", read_only=True)
    details = MealDetailSerializer(many=True, read_only=True)

    class Meta:
        model = Meal
        fields = ["meal_id", "meal_type_id", "meal_type_name", "details"]


class OrderSerializer(serializers.ModelSerializer):
    order_id = serializers.IntegerField(source="id", read_only=True)
    customer_id = serializers.UUIDField(read_only=True, allow_null=True)
    staff_id = serializers.IntegerField(read_only=True, allow_null=True)
    completion_minutes = serializers.FloatField(read_only=True, allow_null=True)
    meals = MealSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "order_id",
            "price",
            "subtotal",
            "order_status",
            "customer_id",
            "customer_name",
            "staff_id",
            "rush_order",
            "points_redeemed",
            "points_earned",
            "datetime",
            "completed_at",
            "completion_minutes",
            "meals",
        ]
        read_only_fields = fields


class ActiveOrderSerializer(serializers.ModelSerializer):
    order_id = serializers.IntegerField(source="id", read_only=True)
    staff_id = serializers.IntegerField(read_only=True, allow_null=True)
    staff_username = serializers.CharField(source="staff.username", read_only=True, default=None)
    meal_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Order
        fields = [
            "order_id",
            "staff_id",
            "staff_username",
            "datetime",
            "price",
            "order_status",
            "rush_order",
            "meal_count",
        ]
        read_only_fields = fields


class KitchenMealSerializer(serializers.ModelSerializer):
    meal_id = serializers.IntegerField(source="id", read_only=True)
    meal_type_name = serializers.CharField(source="meal_type.name", read_only=True)
    items = serializers.SerializerMethodField()

    class Meta:
        model = Meal
        fields = ["meal_id", "meal_type_name", "items"]

    def get_items(self, meal):
        details = KitchenService.group_items_for_kitchen(meal.details.all())
        return [{"name": detail.menu_item.name, "role": detail.role} for detail in details]


class KitchenOrderSerializer(serializers.ModelSerializer):
    order_id = serializers.IntegerField(source="id", read_only=True)
    customer_name = serializers.SerializerMethodField()
    staff_username = serializers.CharField(source="staff.username", read_only=True, default=None)
    meals = KitchenMealSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "order_id",
            "customer_name",
            "datetime",
            "order_status",
            "staff_username",
            "rush_order",
            "meals",
        ]
        read_only_fields = fields

    def get_customer_name(self, order):
        return order.customer_name or "Guest"


class PreparedOrderSerializer(serializers.ModelSerializer):
    order_id = serializers.IntegerField(source="id", read_only=True)
    customer_name = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = ["order_id", "customer_name", "datetime", "completed_at", "order_status"]
        read_only_fields = fields

    def get_customer_name(self, order):
        return order.customer_name or "Guest"
