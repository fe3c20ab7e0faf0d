# storefront/accounts/apps.py
from django.apps import AppConfig


class AccountsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "storefront.accounts"
    label = "accounts"
    verbose_name = "Customer accounts"
