"""
============================================================================
JWT COOKIE AUTHENTICATION - Lee tokens de cookies
============================================================================
"""
from django.conf import settings
from rest_framework_simplejwt.authentication import JWTAuthentication


class JWTCookieAuthentication(JWTAuthentication):
    """
    Autenticación JWT que lee el token de la cookie 'access_token'.
    Si no hay cookie, usa el header Authorization: Bearer <token>.
    """

    def get_cookie_name(self):
        return getattr(settings, 'SIMPLE_JWT', {}).get('AUTH_COOKIE', 'access_token')

    def authenticate(self, request):
        raw_token = request.COOKIES.get(self.get_cookie_name())

        if raw_token is None:
            header = self.get_header(request)
            if header is None:
                return None
            raw_token = self.get_raw_token(header)

        if raw_token is None:
            return None

        validated_token = self.get_validated_token(raw_token)
        return self.get_user(validated_token), validated_token
