# api/episodes/urls.py
from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import EpisodioViewSet

router = DefaultRouter()
router.register(r'episodios', EpisodioViewSet, basename='episodio')

app_name = 'episodes'

urlpatterns = [
    path('', include(router.urls)),
]
