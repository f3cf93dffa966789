# api/agreement_prices/urls.py
from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import PrecioConvenioViewSet

router = DefaultRouter()
router.register(r'precios-convenios', PrecioConvenioViewSet, basename='precio-convenio')

app_name = 'agreement_prices'

urlpatterns = [
    path('', include(router.urls)),
]
