# config/urls.py
from django.contrib import admin
from django.http import JsonResponse
from django.urls import path, include


def health(request):
    return JsonResponse({'ok': True, 'message': 'Servidor GRD activo'})


urlpatterns = [
    path('admin/', admin.site.urls),
    path('health/', health, name='health'),

    # Endpoints del sistema
    path('api/auth/', include('authentication.urls')),
    path('api/users/', include('api.users.urls', namespace='users')),
    path('api/', include('api.backups.urls', namespace='backups')),
    path('api/', include('api.episodes.urls', namespace='episodes')),
    path('api/', include('api.technology_adjustments.urls', namespace='technology_adjustments')),
    path('api/', include('api.agreement_prices.urls', namespace='agreement_prices')),
    path('api/', include('api.exports.urls', namespace='exports')),
    path('api/logs/', include('api.system_logs.urls', namespace='system_logs')),
]
