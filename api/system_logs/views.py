# api/system_logs/views.py
import logging
import uuid
from datetime import datetime, time

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from api.permissions import TienePermisoPorRol
from .models import LogSistema
from .serializers import LogSistemaSerializer

logger = logging.getLogger(__name__)


def _parse_limite(valor, nombre, defecto):
    if valor in (None, ''):
        return defecto
    try:
        numero = int(valor)
    except (TypeError, ValueError):
        raise ValidationError({nombre: [f'{nombre} debe ser un número entero']})
    if numero < 0:
        raise ValidationError({nombre: [f'{nombre} no puede ser negativo']})
    return numero


def _parse_fecha(valor, nombre, fin_del_dia=False):
    """Acepta YYYY-MM-DD o un datetime ISO; retorna un datetime aware."""
    if not valor:
        return None
    try:
        # Solo fecha: se toma el día completo
        dia = parse_date(valor)
        momento = parse_datetime(valor) if dia is None else None
    except ValueError:
        dia = momento = None
    if dia is not None:
        momento = datetime.combine(dia, time.max if fin_del_dia else time.min)
    if momento is None:
        raise ValidationError({nombre: ['Formato de fecha inválido (YYYY-MM-DD)']})
    if timezone.is_naive(momento):
        momento = timezone.make_aware(momento)
    return momento


class LogSistemaListView(APIView):
    """
    GET /api/logs/
    Query params: level, user_id, start_date, end_date, limit, offset
    """
    permission_classes = [TienePermisoPorRol]
    permission_model_name = 'logsistema'

    def get(self, request):
        params = request.query_params
        limit = _parse_limite(params.get('limit'), 'limit', 100)
        offset = _parse_limite(params.get('offset'), 'offset', 0)

        queryset = LogSistema.objects.select_related('usuario')

        level = params.get('level')
        if level and level != 'all':
            queryset = queryset.filter(level=level)

        user_id = params.get('user_id')
        if user_id:
            try:
                queryset = queryset.filter(usuario_id=uuid.UUID(user_id))
            except ValueError:
                raise ValidationError({'user_id': ['user_id debe ser un UUID válido']})

        desde = _parse_fecha(params.get('start_date'), 'start_date')
        if desde:
            queryset = queryset.filter(created_at__gte=desde)

        hasta = _parse_fecha(params.get('end_date'), 'end_date', fin_del_dia=True)
        if hasta:
            queryset = queryset.filter(created_at__lte=hasta)

        total = queryset.count()
        logs = queryset.order_by('-created_at')[offset:offset + limit]

        return Response({
            'logs': LogSistemaSerializer(logs, many=True).data,
            'total': total,
            'limit': limit,
            'offset': offset,
        })
