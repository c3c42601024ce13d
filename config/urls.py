"""
Classifieds — Root URL Configuration

All API endpoints are namespaced under /api/v1/.
The DRF browsable API is available for route inspection in development.

@file config/urls.py
"""

from django.contrib import admin
from django.urls import include, path
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.reverse import reverse

admin.site.site_header = 'Classifieds Administration'
admin.site.site_title = 'Classifieds'
admin.site.index_title = 'Marketplace Location Hierarchy'


@api_view(['GET'])
@permission_classes([AllowAny])
def api_root(request, format=None):
    """Classifieds API v1 — endpoint directory."""
    return Response({
        'locations': {
            'list': reverse('api-v1:locations:location-list', request=request, format=format),
            'hierarchy': reverse('api-v1:locations:location-hierarchy', request=request, format=format),
            'areas_hierarchy': reverse('api-v1:locations:location-areas-hierarchy', request=request, format=format),
            'search': reverse('api-v1:locations:location-search', request=request, format=format),
            'areas_search': reverse('api-v1:locations:location-areas-search', request=request, format=format),
        },
    })


api_v1_patterns = [
    path('', api_root, name='api-root'),
    path('locations/', include('locations.urls', namespace='locations')),
]

urlpatterns = [
    path('admin/', admin.site.urls),

    # DRF session auth (powers the "Log in" button on the browsable API)
    path('api/auth/', include('rest_framework.urls', namespace='rest_framework')),

    # Versioned API
    path('api/v1/', include((api_v1_patterns, 'api-v1'))),
]
