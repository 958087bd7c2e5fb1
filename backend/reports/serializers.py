from rest_framework import serializers

from orders.models import Order


class ReportParameterSerializer(serializers.Serializer):
    """Validate report query parameters"""

    date = serializers.DateField(required=False)
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, data):
        """Validate date range parameters"""
        start_date = data.get("start_date")
        end_date = data.get("end_date")

        if (start_date is None) != (end_date is None):
            raise serializers.ValidationError(
                "start_date and end_date must be provided together"
            )

        if start_date and end_date and start_date > end_date:
            raise serializers.ValidationError("Start date must be on or before end date")

        # Limit date range to prevent expensive queries
        max_days = 365
        if start_date and end_date and (end_date - start_date).days > max_days:
            raise serializers.ValidationError(
                f"Date range cannot exceed {max_days} days"
            )

        return data


class OrderBreakdownSerializer(serializers.ModelSerializer):
    order_id = serializers.IntegerField(source="id", read_only=True)

    class Meta:
        model = Order
        fields = ["order_id", "datetime", "price", "order_status", "customer_name"]
        read_only_fields = fields
