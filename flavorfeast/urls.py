# flavorfeast/urls.py
"""
Root URL configuration.

The JSON API lives under /api/; Django admin under /admin/.
"""

from django.contrib import admin
from django.urls import path, include

from storefront.api import health

urlpatterns = [
    path("api/health", health, name="health"),
    path("api/", include("storefront.accounts.urls")),
    path("api/menu", include("storefront.menu.urls")),
    path("api/", include("storefront.orders.urls")),

    path("admin/", admin.site.urls),
]
