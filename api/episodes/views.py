# api/episodes/views.py
import logging

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

from api.agreement_prices.services.precio_convenio_service import PrecioConvenioService
from api.permissions import TienePermisoPorRol
from .models import Episodio
from .repositories.episodio_repository import a_registro
from .serializers import EpisodioSerializer
from .services.episodio_service import EpisodioService

logger = logging.getLogger(__name__)


class EpisodioPagination(PageNumberPagination):
    page_size = 10
    page_size_query_param = 'page_size'
    max_page_size = 100


class EpisodioViewSet(mixins.ListModelMixin,
                      mixins.RetrieveModelMixin,
                      mixins.CreateModelMixin,
                      mixins.UpdateModelMixin,
                      viewsets.GenericViewSet):
    """
    GET   /api/episodios/            - listado paginado (filtros: convenio, validado, tipo_episodio, grd, search)
    GET   /api/episodios/meta/       - total y fecha del último episodio cargado
    GET   /api/episodios/final/      - registros de facturación calculados, paginados
    GET   /api/episodios/{id}/       - por episodio CMBD o id interno
    POST  /api/episodios/            - admin
    PUT   /api/episodios/{id}/       - admin
    PATCH /api/episodios/{id}/       - campos según rol (EpisodioService)
    """
    serializer_class = EpisodioSerializer
    queryset = Episodio.objects.all()
    pagination_class = EpisodioPagination
    permission_classes = [TienePermisoPorRol]
    permission_model_name = 'episodio'

    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_fields = ['validado', 'tipo_episodio', 'grd']
    search_fields = ['episodio_cmbd', 'numero_folio', 'paciente__rut', 'paciente__nombre']
    ordering_fields = ['id', 'fecha_ingreso', 'fecha_alta', 'monto_final']
    ordering = ['-id']

    def get_queryset(self):
        queryset = Episodio.objects.select_related('paciente', 'grd')
        convenio = (self.request.query_params.get('convenio') or '').strip()
        if convenio:
            queryset = queryset.filter(convenio__icontains=convenio)
        return queryset

    def get_object(self):
        """Busca primero por episodio CMBD y luego por id interno"""
        valor = self.kwargs[self.lookup_field]
        queryset = self.get_queryset()

        episodio = queryset.filter(episodio_cmbd=valor).first()
        if episodio is None and str(valor).isdigit():
            episodio = queryset.filter(pk=int(valor)).first()
        if episodio is None:
            raise NotFound('Episodio no encontrado')

        self.check_object_permissions(self.request, episodio)
        return episodio

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        episodio = EpisodioService.crear(serializer.validated_data, request.user)
        return Response(self.get_serializer(episodio).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        EpisodioService.verificar_campos(request.user, request.data.keys())

        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        episodio = EpisodioService.actualizar(instance, serializer.validated_data, request.user)
        return Response(self.get_serializer(episodio).data)

    def partial_update(self, request, *args, **kwargs):
        kwargs['partial'] = True
        return self.update(request, *args, **kwargs)

    @action(detail=False, methods=['get'])
    def meta(self, request):
        ultimo = Episodio.objects.order_by('-created_at').values_list('created_at', flat=True).first()
        return Response({
            'count': Episodio.objects.count(),
            'lastImportedAt': ultimo.isoformat() if ultimo else None,
        })

    @action(detail=False, methods=['get'])
    def final(self, request):
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        precios = PrecioConvenioService.tabla_vigente()

        if page is not None:
            return self.get_paginated_response([a_registro(e, precios) for e in page])
        return Response([a_registro(e, precios) for e in queryset])
