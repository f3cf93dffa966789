# api/exports/urls.py
from django.urls import path
from .views import ExportInfoView, ExportView

app_name = 'exports'

urlpatterns = [
    path('export/', ExportView.as_view(), name='export'),
    path('export/info/', ExportInfoView.as_view(), name='export-info'),
]
