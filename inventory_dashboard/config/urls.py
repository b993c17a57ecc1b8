"""
URL configuration for the inventory dashboard.

Each app mounts its pages at the root; the inventory API itself lives on a
separate host (see INVENTORY_API_BASE_URL).
"""
from django.urls import path, include

urlpatterns = [
    path('', include('inventory_dashboard.core.urls')),
    path('', include('inventory_dashboard.inventory.urls')),
    path('', include('inventory_dashboard.restock.urls')),
    path('', include('inventory_dashboard.catalog.urls')),
    path('', include('inventory_dashboard.reports.urls')),
]
