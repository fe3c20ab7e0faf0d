from django.contrib import admin

from .models import NotificationLog, Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ("menu_item_id", "quantity", "price")
    fields = ("menu_item_id", "quantity", "price")
    can_delete = False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "customer_name", "customer_email", "total_amount", "status", "created_at")
    list_filter = ("status", "created_at")
    search_fields = ("customer_name", "customer_email", "customer_phone")
    readonly_fields = ("user", "total_amount", "created_at", "updated_at")
    inlines = [OrderItemInline]


@admin.register(NotificationLog)
class NotificationLogAdmin(admin.ModelAdmin):
    list_display = ("id", "order", "to_email", "order_status", "status", "created_at", "sent_at")
    list_filter = ("status", "created_at")
    search_fields = ("to_email", "subject")
    readonly_fields = ("created_at", "sent_at", "error_message")
