"""
============================================================================
AUTHENTICATION MIDDLEWARE
============================================================================
Middlewares personalizados para autenticación y seguridad
"""

from django.core.cache import cache
from django.http import JsonResponse
import re


def get_client_ip(request):
    """
    Obtiene la IP real del cliente, considerando proxies.
    """
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        # Tomar la primera IP (la del cliente real)
        return x_forwarded_for.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR')


# ============================================================================
# CSRF EXEMPT MIDDLEWARE
# ============================================================================

class CSRFExemptMiddleware:
    """
    Middleware que exime ciertos endpoints de la verificación CSRF.

    Esto es necesario porque @csrf_exempt no funciona con @api_view de DRF.
    El middleware intercepta las requests ANTES de que Django verifique CSRF.
    """
    def __init__(self, get_response):
        self.get_response = get_response
        # Patrones de URLs que NO requieren CSRF
        self.exempt_patterns = [
            r'^api/auth/signup/?$',
            r'^api/auth/login/?$',
            r'^api/auth/logout/?$',
            r'^api/auth/refresh/?$',
        ]

    def __call__(self, request):
        path = request.path_info.lstrip('/')

        for pattern in self.exempt_patterns:
            if re.match(pattern, path):
                setattr(request, '_dont_enforce_csrf_checks', True)
                break

        return self.get_response(request)


# ============================================================================
# LOGIN RATE LIMIT MIDDLEWARE
# ============================================================================

class LoginRateLimitMiddleware:
    """
    Middleware para limitar intentos de login por IP.
    Bloquea después de 5 intentos durante 1 minuto; un login exitoso
    reinicia el contador.
    """
    MAX_ATTEMPTS = 5
    BLOCK_DURATION = 60  # segundos
    LOGIN_PATH = '/api/auth/login/'

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        es_login = request.path == self.LOGIN_PATH and request.method == 'POST'

        if es_login:
            cache_key = f'login_attempts_{get_client_ip(request)}'
            attempts = cache.get(cache_key, 0)

            if attempts >= self.MAX_ATTEMPTS:
                return JsonResponse({
                    'success': False,
                    'status_code': 429,
                    'message': f'Demasiados intentos. Espera {self.BLOCK_DURATION} segundos antes de volver a intentar.',
                    'data': None,
                    'errors': {'detail': ['TooManyRequests']},
                }, status=429)

            cache.set(cache_key, attempts + 1, self.BLOCK_DURATION)

        response = self.get_response(request)

        if es_login and response.status_code == 200:
            cache.delete(f'login_attempts_{get_client_ip(request)}')

        return response
