from django.urls import path

from . import views

app_name = 'reports'

urlpatterns = [
    path('reports/', views.reports, name='reports'),
    path('activity/', views.activity_log, name='activity-log'),
    path('activity/<str:table_name>/<str:record_id>/', views.record_history, name='record-history'),
]
