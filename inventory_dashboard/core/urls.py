from django.urls import path
from .views import home, select_office, health

app_name = 'core'

urlpatterns = [
    path('', home, name='home'),
    path('office/', select_office, name='select-office'),
    path('health/', health, name='health'),
]
