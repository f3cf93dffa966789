# api/system_logs/urls.py
from django.urls import path
from .views import LogSistemaListView

app_name = 'system_logs'

urlpatterns = [
    path('', LogSistemaListView.as_view(), name='log-list'),
]
