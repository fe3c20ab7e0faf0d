from rest_framework import generics

from .models import MenuItem
from .serializers import MenuItemSerializer


# API View: Returns JSON of all available menu items
class MenuItemListView(generics.ListAPIView):
    authentication_classes = []
    queryset = MenuItem.objects.filter(is_available=True)
    serializer_class = MenuItemSerializer
