from decimal import Decimal

from rest_framework import serializers

from .models import Order, OrderItem


# ---- input ----

class LineItemInputSerializer(serializers.Serializer):
    # "id" is the menu item id, as sent by the storefront cart.
    id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0"))


class PlaceOrderSerializer(serializers.Serializer):
    items = LineItemInputSerializer(many=True, allow_empty=False)
    customer_name = serializers.CharField(max_length=120)
    customer_email = serializers.EmailField()
    customer_phone = serializers.CharField(max_length=30, required=False, allow_blank=True, default="")
    special_instructions = serializers.CharField(required=False, allow_blank=True, allow_null=True, default="")
    total_amount = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0"))


class StatusUpdateSerializer(serializers.Serializer):
    status = serializers.CharField(max_length=32)


# ---- output ----

class OrderItemSerializer(serializers.ModelSerializer):
    order_id = serializers.IntegerField(read_only=True)
    menu_item_id = serializers.IntegerField(read_only=True, allow_null=True)
    item_name = serializers.CharField(read_only=True, allow_null=True)

    class Meta:
        model = OrderItem
        fields = ["id", "order_id", "menu_item_id", "item_name", "quantity", "price"]


class OrderSerializer(serializers.ModelSerializer):
    user_id = serializers.IntegerField(read_only=True)
    user_name = serializers.CharField(read_only=True, allow_null=True)
    items = OrderItemSerializer(source="line_items", many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "user_id",
            "user_name",
            "customer_name",
            "customer_email",
            "customer_phone",
            "special_instructions",
            "total_amount",
            "status",
            "created_at",
            "updated_at",
            "items",
        ]
