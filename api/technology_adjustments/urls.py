# api/technology_adjustments/urls.py
from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import AjusteTecnologiaViewSet

router = DefaultRouter()
router.register(r'ajustes-tecnologia', AjusteTecnologiaViewSet, basename='ajuste-tecnologia')

app_name = 'technology_adjustments'

urlpatterns = [
    path('', include(router.urls)),
]
