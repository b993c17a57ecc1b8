from django.urls import path

from . import views

app_name = 'catalog'

urlpatterns = [
    path('admin/', views.catalog_admin, name='admin'),
    path('admin/makes/new/', views.make_create, name='make-create'),
    path('admin/makes/<str:make_id>/edit/', views.make_edit, name='make-edit'),
    path('admin/makes/<str:make_id>/delete/', views.make_delete, name='make-delete'),
    path('admin/models/new/', views.model_create, name='model-create'),
    path('admin/models/<str:model_id>/edit/', views.model_edit, name='model-edit'),
    path('admin/models/<str:model_id>/delete/', views.model_delete, name='model-delete'),

    # JSON lookups for the make/model dropdowns
    path('catalog/lookups/makes/', views.make_lookup, name='make-lookup'),
    path('catalog/lookups/models/', views.model_lookup, name='model-lookup'),
]
