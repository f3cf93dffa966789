# api/backups/urls.py
from django.urls import path
from .views import RespaldoListView, RespaldoUploadView

app_name = 'backups'

urlpatterns = [
    path('episodios/<int:episodio_id>/respaldo/', RespaldoUploadView.as_view(), name='respaldo-upload'),
    path('episodios/<int:episodio_id>/respaldos/', RespaldoListView.as_view(), name='respaldo-list'),
]
