from django.urls import path

from . import views

app_name = 'inventory'


def item_routes(prefix, kind):
    kwargs = {'kind': kind}
    return [
        path(f'{prefix}/', views.item_list, kwargs, name=f'{prefix}-list'),
        path(f'{prefix}/new/', views.item_create, kwargs, name=f'{prefix}-create'),
        path(f'{prefix}/<str:item_id>/edit/', views.item_edit, kwargs, name=f'{prefix}-edit'),
        path(f'{prefix}/<str:item_id>/delete/', views.item_delete, kwargs, name=f'{prefix}-delete'),
    ]


urlpatterns = (
    item_routes('computers', 'computers')
    + item_routes('peripherals', 'peripherals')
    + item_routes('printer-items', 'printer_items')
)
