from django.urls import path

from .views import AdminOrderListView, AdminOrderStatusView, OrderCreateView

urlpatterns = [
    path("orders", OrderCreateView.as_view(), name="order-create"),
    path("admin/orders", AdminOrderListView.as_view(), name="admin-order-list"),
    path("admin/orders/<int:order_id>/status", AdminOrderStatusView.as_view(), name="admin-order-status"),
]
