from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
import logging

from customers.exceptions import (
    CustomerNotFoundError,
    InsufficientPointsError,
    InvalidPointsError,
)
from inventory.exceptions import InsufficientStockError
from .exceptions import (
    EmptyOrderError,
    InvalidOrderStatusError,
    InvalidStatusTransitionError,
    OrderNotFoundError,
    UnknownMealTypeError,
    UnknownMenuItemError,
)
from .filters import OrderFilter
from .models import Order
from .serializers import (
    ActiveOrderSerializer,
    KitchenOrderSerializer,
    OrderCreateSerializer,
    OrderSerializer,
    PreparedOrderSerializer,
    UpdateOrderStatusSerializer,
)
from .services import KitchenService, OrderService, OrderStatusService

logger = logging.getLogger(__name__)

# Domain errors and the HTTP status each one is surfaced with.
ERROR_STATUS_CODES = (
    ((EmptyOrderError, UnknownMealTypeError, UnknownMenuItemError), status.HTTP_400_BAD_REQUEST),
    ((InvalidPointsError, InvalidOrderStatusError), status.HTTP_400_BAD_REQUEST),
    ((CustomerNotFoundError, OrderNotFoundError), status.HTTP_404_NOT_FOUND),
    (
        (InsufficientPointsError, InvalidStatusTransitionError, InsufficientStockError),
        status.HTTP_409_CONFLICT,
    ),
)


def error_response(exc: Exception) -> Response:
    """Map a domain error onto the error envelope."""
    for exc_types, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, exc_types):
            return Response({"success": False, "error": str(exc)}, status=status_code)
    raise exc


class OrderViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    Orders endpoint for the kiosk, cashier and kitchen clients.

    Orders are only ever created through OrderService and only ever change
    status through OrderStatusService, so there is no generic update/delete.
    """

    queryset = Order.objects.select_related("customer", "staff").prefetch_related(
        "meals__meal_type", "meals__details__menu_item"
    )
    serializer_class = OrderSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = OrderFilter
    lookup_value_regex = r"\d+"

    def get_serializer_class(self):
        """
        Return the appropriate serializer class based on the request action.
        """
        if self.action == "create":
            return OrderCreateSerializer
        if self.action == "update_status":
            return UpdateOrderStatusSerializer
        if self.action == "active":
            return ActiveOrderSerializer
        if self.action == "kitchen":
            return KitchenOrderSerializer
        if self.action == "prepared":
            return PreparedOrderSerializer
        return OrderSerializer

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        serializer = self.get_serializer(queryset, many=True)
        return Response({"success": True, "data": serializer.data})

    def retrieve(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_object())
        return Response({"success": True, "data": serializer.data})

    def create(self, request, *args, **kwargs):
        """
        Price and persist an order in a single transaction.
        """
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            result = OrderService.create_order(
                order_items=serializer.get_selections(),
                customer_name=data.get("customer_name"),
                customer_id=data.get("customerId"),
                points_applied=data.get("pointsApplied", 0),
                rush_order=data.get("rush_order", False),
                staff=request.user,
            )
        except (
            EmptyOrderError,
            UnknownMealTypeError,
            UnknownMenuItemError,
            InvalidPointsError,
            CustomerNotFoundError,
            InsufficientPointsError,
        ) as e:
            logger.warning(f"Order rejected: {e}")
            return error_response(e)
        except Exception:
            logger.exception("Order creation failed; transaction rolled back")
            return Response(
                {"success": False, "error": "Failed to create order"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(
            {
                "success": True,
                "data": {
                    "orderId": result.order_id,
                    "totalPrice": result.final_price,
                    "subtotal": result.subtotal,
                    "discount": result.discount,
                    "pointsRedeemed": result.points_redeemed,
                    "pointsEarned": result.points_earned,
                },
            },
            status=status.HTTP_201_CREATED,
        )

    @action(detail=True, methods=["patch"], url_path="status")
    def update_status(self, request: Request, pk=None) -> Response:
        """
        Updates the status of an order, ensuring valid transitions via OrderStatusService.
        """
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        new_status = serializer.validated_data["status"]

        try:
            result = OrderStatusService.set_status(pk, new_status)
        except (
            OrderNotFoundError,
            InvalidOrderStatusError,
            InvalidStatusTransitionError,
            InsufficientStockError,
        ) as e:
            logger.warning(f"Status change for order {pk} rejected: {e}")
            return error_response(e)
        except Exception:
            logger.exception(f"Status change for order {pk} failed; transaction rolled back")
            return Response(
                {"success": False, "error": "Failed to update order status"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        order = result.order
        return Response(
            {
                "success": True,
                "data": {
                    "order_id": order.pk,
                    "order_status": order.order_status,
                    "previous_status": result.previous_status,
                    "changed": result.changed,
                    "completed_at": order.completed_at,
                    "points_earned": result.points_earned,
                    "inventory": result.inventory.to_dict() if result.inventory else None,
                },
            },
            status=status.HTTP_200_OK,
        )

    @action(detail=False, methods=["get"])
    def active(self, request: Request) -> Response:
        """Every order that has not been cancelled."""
        serializer = self.get_serializer(KitchenService.get_active_orders(), many=True)
        return Response({"success": True, "data": serializer.data})

    @action(detail=False, methods=["get"])
    def kitchen(self, request: Request) -> Response:
        """Orders the kitchen still has to prepare, with their meals."""
        serializer = self.get_serializer(KitchenService.get_kitchen_orders(), many=True)
        return Response({"success": True, "data": serializer.data})

    @action(detail=False, methods=["get"])
    def prepared(self, request: Request) -> Response:
        serializer = self.get_serializer(KitchenService.get_prepared_orders(), many=True)
        return Response({"success": True, "data": serializer.data})

    @action(
        detail=False,
        methods=["get"],
        url_path=r"customer/(?P<customer_id>[0-9a-fA-F-]{32,36})",
    )
    def customer(self, request: Request, customer_id=None) -> Response:
        """A rewards customer's order history."""
        serializer = self.get_serializer(KitchenService.get_customer_orders(customer_id), many=True)
        return Response({"success": True, "data": serializer.data})
