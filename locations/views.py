"""
Locations — Views

Read-heavy ViewSet for the location hierarchy. Besides plain CRUD it
serves the four lookups the location selector consumes:

  hierarchy/           provinces (all levels), or ?province_id= subtree
  areas/hierarchy/     provinces reaching an area, or ?province_id= subtree
  search/?q=           any level
  areas/search/?q=     areas only

@file locations/views.py
"""

from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from .models import Location
from .permissions import CanModifyLocations
from .serializers import LocationReadSerializer, LocationWriteSerializer
from .services import LocationService


class LocationViewSet(viewsets.ModelViewSet):
    """
    CRUD for locations.

    List / retrieve and the hierarchy lookups are public.
    Create / update / delete restricted to staff.
    """

    permission_classes = [CanModifyLocations]
    filterset_fields = ['location_type', 'parent']
    search_fields = ['name']
    ordering_fields = ['name', 'location_type', 'created_at']
    ordering = ['location_type', 'name']

    def get_queryset(self):
        return Location.objects.select_related('parent__parent__parent__parent')

    def get_serializer_class(self):
        if self.action in ('list', 'retrieve'):
            return LocationReadSerializer
        return LocationWriteSerializer

    def _hierarchy(self, request, areas_only):
        province_id = request.query_params.get('province_id')
        if province_id:
            data = LocationService.get_province_tree(province_id, areas_only=areas_only)
        else:
            data = LocationService.get_provinces(areas_only=areas_only)
        return Response({'success': True, 'data': data})

    @action(detail=False, methods=['get'], url_path='hierarchy')
    def hierarchy(self, request):
        return self._hierarchy(request, areas_only=False)

    @action(detail=False, methods=['get'], url_path='areas/hierarchy')
    def areas_hierarchy(self, request):
        return self._hierarchy(request, areas_only=True)

    @action(detail=False, methods=['get'], url_path='search')
    def search(self, request):
        results = LocationService.search(request.query_params.get('q', ''))
        return Response({'success': True, 'data': results})

    @action(detail=False, methods=['get'], url_path='areas/search')
    def areas_search(self, request):
        results = LocationService.search(request.query_params.get('q', ''), areas_only=True)
        return Response({'success': True, 'data': results})

    @action(detail=True, methods=['get'], url_path='node')
    def node(self, request, pk=None):
        """Single node with hierarchy_info; resolves a selector's initial id."""
        return Response({'success': True, 'data': LocationService.get_location(pk)})
