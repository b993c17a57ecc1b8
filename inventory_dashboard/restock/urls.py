from django.urls import path

from . import views

app_name = 'restock'

urlpatterns = [
    path('restock-requests/', views.request_list, name='request-list'),
    path('restock-requests/new/', views.request_create, name='request-create'),
    path('restock-requests/<str:request_id>/edit/', views.request_edit, name='request-edit'),
    path('restock-requests/<str:request_id>/delete/', views.request_delete, name='request-delete'),
]
