"""
============================================================================
AUTHENTICATION VIEWS
============================================================================
Endpoints de autenticación con JWT en HttpOnly cookies
"""

import logging

from django.conf import settings
from django.contrib.auth import authenticate
from django.shortcuts import get_object_or_404
from django.utils import timezone

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import APIException, AuthenticationFailed, PermissionDenied
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from api.system_logs.services.log_service import LogService
from api.users.models import Usuario
from authentication.middleware import get_client_ip
from authentication.serializers import (
    AuthUserSerializer,
    LoginSerializer,
    SignupSerializer,
)

logger = logging.getLogger(__name__)

ACCESS_MAX_AGE = 3600  # 1 hora
REFRESH_MAX_AGE = 604800  # 7 días


class Conflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'El recurso ya existe'
    default_code = 'conflict'


# ============================================================================
# COOKIE HELPER
# ============================================================================

def set_auth_cookie(response, key, value, max_age):
    """
    Configura cookie de autenticación según el entorno.

    En desarrollo: sin secure, sin domain (para localhost:puerto)
    En producción: con secure=True
    """
    cookie_params = {
        'key': key,
        'value': value,
        'httponly': True,
        'samesite': 'Lax',
        'max_age': max_age,
        'path': '/',
    }

    # Solo en producción agregar secure=True
    if not settings.DEBUG:
        cookie_params['secure'] = True

    response.set_cookie(**cookie_params)


def _set_token_cookies(response, usuario):
    refresh = RefreshToken.for_user(usuario)
    set_auth_cookie(response, 'access_token', str(refresh.access_token), ACCESS_MAX_AGE)
    set_auth_cookie(response, 'refresh_token', str(refresh), REFRESH_MAX_AGE)


# ============================================================================
# SIGNUP
# ============================================================================

@api_view(['POST'])
@permission_classes([AllowAny])
def signup_view(request):
    """
    Registro de cuentas nuevas. Siempre con rol codificador; los demás roles
    los asigna un administrador.
    """
    serializer = SignupSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    correo = serializer.validated_data['correo']
    if Usuario.objects.filter(correo__iexact=correo).exists():
        raise Conflict('El usuario ya existe')

    usuario = Usuario.objects.create_user(
        correo=correo,
        nombre=serializer.validated_data['nombre'],
        password=serializer.validated_data['password'],
        rol=Usuario.ROL_CODIFICADOR,
    )

    logger.info(f"Registro exitoso: {usuario.correo}")

    response = Response({
        'user': AuthUserSerializer(usuario).data,
        'message': 'Usuario registrado exitosamente'
    }, status=status.HTTP_201_CREATED)
    _set_token_cookies(response, usuario)
    return response


# ============================================================================
# LOGIN
# ============================================================================

@api_view(['POST'])
@permission_classes([AllowAny])
def login_view(request):
    """
    Endpoint para login de usuarios.
    Retorna datos del usuario y guarda tokens en cookies HttpOnly.
    """
    serializer = LoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    correo = serializer.validated_data['correo']
    password = serializer.validated_data['password']
    ip = get_client_ip(request)

    usuario = authenticate(request, correo=correo, password=password)

    if not usuario:
        LogService.registrar_login(None, False, ip=ip, correo=correo)
        raise AuthenticationFailed('Credenciales inválidas')

    if not usuario.is_active:
        LogService.registrar_login(None, False, ip=ip, correo=correo)
        raise PermissionDenied('Usuario inactivo. Contacta al administrador.')

    usuario.ultimo_acceso = timezone.now()
    usuario.save(update_fields=['ultimo_acceso'])

    LogService.registrar_login(usuario, True, ip=ip)
    logger.info(f"Login exitoso: {usuario.correo}")

    response = Response({
        'user': AuthUserSerializer(usuario).data,
        'message': 'Login exitoso'
    }, status=status.HTTP_200_OK)
    _set_token_cookies(response, usuario)
    return response


# ============================================================================
# GET ME
# ============================================================================

@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_me(request):
    """
    Obtener perfil del usuario actual autenticado.
    El token se lee automáticamente de las cookies por JWTCookieAuthentication.
    """
    return Response({
        'user': AuthUserSerializer(request.user).data,
        'message': 'Usuario obtenido exitosamente'
    })


# ============================================================================
# REFRESH TOKEN
# ============================================================================

@api_view(['POST'])
@permission_classes([AllowAny])
def refresh_token_view(request):
    """
    Endpoint para refrescar tokens.

    Si ROTATE_REFRESH_TOKENS=True, genera nuevo refresh token.
    """
    refresh_token = request.COOKIES.get('refresh_token')

    if not refresh_token:
        raise AuthenticationFailed('No hay refresh token disponible')

    try:
        old_refresh = RefreshToken(refresh_token)

        user_id = old_refresh.payload.get('user_id')
        if not user_id:
            raise TokenError("Token no contiene user_id")

        usuario = get_object_or_404(Usuario, id=user_id, is_active=True)

        simple_jwt_settings = getattr(settings, 'SIMPLE_JWT', {})
        rotate_refresh = simple_jwt_settings.get('ROTATE_REFRESH_TOKENS', False)
        blacklist_after = simple_jwt_settings.get('BLACKLIST_AFTER_ROTATION', False)

        response = Response({
            'refreshed': True,
            'message': 'Token refrescado exitosamente'
        })

        if rotate_refresh:
            if blacklist_after:
                try:
                    old_refresh.blacklist()
                    logger.info("Token antiguo blacklisteado")
                except AttributeError:
                    logger.warning("Blacklist no disponible")

            _set_token_cookies(response, usuario)
        else:
            # Rotación deshabilitada - solo nuevo access token
            set_auth_cookie(response, 'access_token', str(old_refresh.access_token), ACCESS_MAX_AGE)

        logger.info(f"Token refresh exitoso para: {usuario.correo}")
        return response

    except TokenError as e:
        logger.warning(f"Token inválido o expirado: {str(e)}")
        raise AuthenticationFailed('Refresh token inválido o expirado')


# ============================================================================
# LOGOUT
# ============================================================================

@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout_view(request):
    """
    Endpoint para cerrar sesión.
    Elimina las cookies y blacklistea el refresh token.
    """
    refresh_token = request.COOKIES.get('refresh_token')

    if refresh_token:
        try:
            RefreshToken(refresh_token).blacklist()
            logger.info("Token blacklisteado")
        except (TokenError, AttributeError) as e:
            logger.warning(f"Token blacklist error: {str(e)}")

    response = Response({'message': 'Logout exitoso'})

    response.delete_cookie('access_token', path='/', samesite='Lax')
    response.delete_cookie('refresh_token', path='/', samesite='Lax')

    logger.info(f"Logout exitoso: {request.user.correo}")

    return response
