"""
storefront.orders.views

POST /api/orders                      bearer token   → {message, orderId}
GET  /api/admin/orders                bearer + admin → [order{..., items: [...]}, ...]
PUT  /api/admin/orders/<id>/status    bearer + admin → {message}

Views stay thin: validate input, hand off to the workflow coordinator.
request.user is the verified Claims set by BearerTokenAuthentication.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .repository import ContactInfo, LineItemDraft
from .serializers import OrderSerializer, PlaceOrderSerializer, StatusUpdateSerializer
from .workflow import default_workflow


class OrderCreateView(APIView):
    def post(self, request, *args, **kwargs):
        ser = PlaceOrderSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        order_id = default_workflow().place_order(
            request.user,
            contact=ContactInfo(
                name=data["customer_name"],
                email=data["customer_email"],
                phone=data.get("customer_phone") or "",
            ),
            instructions=data.get("special_instructions") or "",
            total_amount=data["total_amount"],
            line_items=[
                LineItemDraft(menu_item_id=item["id"], quantity=item["quantity"], price=item["price"])
                for item in data["items"]
            ],
        )
        return Response({"message": "Order placed successfully", "orderId": order_id}, status=status.HTTP_200_OK)


class AdminOrderListView(APIView):
    def get(self, request, *args, **kwargs):
        orders = default_workflow().list_orders(request.user)
        return Response(OrderSerializer(orders, many=True).data)


class AdminOrderStatusView(APIView):
    def put(self, request, order_id: int, *args, **kwargs):
        # Role gate before input validation: non-admins learn nothing about the payload.
        workflow = default_workflow()
        workflow.authorize(request.user)

        ser = StatusUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        workflow.update_status(request.user, order_id, ser.validated_data["status"])
        # Same message whether or not the email goes out.
        return Response({"message": "Order status updated"})
