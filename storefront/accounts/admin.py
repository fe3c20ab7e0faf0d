from django.contrib import admin

from .models import Account


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "email", "role", "is_admin", "created_at")
    list_filter = ("role", "created_at")
    search_fields = ("name", "email")
    readonly_fields = ("password", "created_at")
