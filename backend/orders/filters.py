import django_filters
from .models import Order


class OrderFilter(django_filters.FilterSet):
    """
    Filters for the order list.

    date_from / date_to match on the calendar date the order was placed.
    """

    status = django_filters.MultipleChoiceFilter(
        field_name="order_status", choices=Order.OrderStatus.choices
    )
    customer = django_filters.UUIDFilter(field_name="customer_id")
    rush_order = django_filters.BooleanFilter(field_name="rush_order")
    date_from = django_filters.DateFilter(field_name="datetime", lookup_expr="date__gte")
    date_to = django_filters.DateFilter(field_name="datetime", lookup_expr="date__lte")
    completed_after = django_filters.DateTimeFilter(field_name="completed_at", lookup_expr="gte")
    completed_before = django_filters.DateTimeFilter(field_name="completed_at", lookup_expr="lte")

    class Meta:
        model = Order
        fields = ["status", "customer", "rush_order", "date_from", "date_to"]
