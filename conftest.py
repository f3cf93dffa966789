# conftest.py
"""
Fixtures compartidas por los tests de todas las apps.
"""
import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from api.users.factories import UsuarioFactory
from api.users.models import Usuario
from common.services.storage_service import StorageService


@pytest.fixture(autouse=True)
def limpiar_cache():
    """El rate limit de login y los throttles viven en el cache local"""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture(autouse=True)
def storage_local(settings, tmp_path):
    """Nunca tocar MinIO/S3 desde los tests"""
    settings.STORAGE_BACKEND = 'local'
    settings.MEDIA_ROOT = str(tmp_path / 'media')
    StorageService.reset()
    yield
    StorageService.reset()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def admin_user(db):
    return UsuarioFactory(rol=Usuario.ROL_ADMIN, correo='admin@ucchristus.cl', nombre='Admin Sistema')


@pytest.fixture
def codificador_user(db):
    return UsuarioFactory(rol=Usuario.ROL_CODIFICADOR, correo='codificador@ucchristus.cl')


@pytest.fixture
def finanzas_user(db):
    return UsuarioFactory(rol=Usuario.ROL_FINANZAS, correo='finanzas@ucchristus.cl')


@pytest.fixture
def gestion_user(db):
    return UsuarioFactory(rol=Usuario.ROL_GESTION, correo='gestion@ucchristus.cl')


@pytest.fixture
def cliente_como():
    """Cliente autenticado con el usuario indicado"""
    def _cliente(usuario):
        client = APIClient()
        client.force_authenticate(user=usuario)
        return client
    return _cliente
