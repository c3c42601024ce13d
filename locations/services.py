"""
Locations — Service Layer

Query helpers backing the location-hierarchy endpoints consumed by the
location selector: province roots, lazily requested province subtrees,
substring search and single-node lookup.

Province lists and subtrees are cached; any write to Location bumps the
cache generation (see locations/signals.py).

@file locations/services.py
"""

import logging
from collections import defaultdict

from django.conf import settings
from django.core.cache import cache
from django.db.models import Case, IntegerField, Value, When

from core.constants import (
    LOCATIONS_CACHE_PREFIX,
    LOCATIONS_CACHE_TTL,
    SEARCH_MIN_LENGTH,
    SEARCH_RESULT_LIMIT,
)
from core.exceptions import InvalidHierarchyError, ResourceNotFoundError

from .models import Location

logger = logging.getLogger('classifieds')

GENERATION_KEY = f'{LOCATIONS_CACHE_PREFIX}:generation'

# Province -> district -> municipality -> ward -> area, enough to reach an area.
_AREA_DESCENDANT_LOOKUP = 'children__children__children__children__location_type'


def _cache_key(*parts) -> str:
    generation = cache.get_or_set(GENERATION_KEY, 1, None)
    return ':'.join([LOCATIONS_CACHE_PREFIX, str(generation), *map(str, parts)])


def _cache_ttl() -> int:
    return getattr(settings, 'LOCATIONS_CACHE_TTL', LOCATIONS_CACHE_TTL)


def node_dict(location: Location) -> dict:
    """Flat wire representation shared by every endpoint."""
    data = {
        'id': location.pk,
        'name': location.name,
        'type': location.location_type,
        'parent_id': location.parent_id,
    }
    if location.location_type == Location.LocationType.WARD:
        data['ward_number'] = location.ward_number
    return data


class LocationService:
    """Read-oriented service for the location hierarchy."""

    @staticmethod
    def invalidate_cache():
        try:
            cache.incr(GENERATION_KEY)
        except ValueError:
            cache.set(GENERATION_KEY, 1, None)

    @staticmethod
    def get_provinces(areas_only: bool = False) -> list[dict]:
        """Province roots, without children. Areas-only keeps provinces that reach an area."""
        key = _cache_key('provinces', 'areas' if areas_only else 'all')
        cached = cache.get(key)
        if cached is not None:
            return cached

        qs = Location.objects.filter(location_type=Location.LocationType.PROVINCE)
        if areas_only:
            qs = qs.filter(**{_AREA_DESCENDANT_LOOKUP: Location.LocationType.AREA}).distinct()
        provinces = [node_dict(p) for p in qs.order_by('name')]

        cache.set(key, provinces, _cache_ttl())
        return provinces

    @staticmethod
    def get_province_tree(province_id, areas_only: bool = False) -> dict:
        """
        Nested subtree of one province:

            {id, name, type, parent_id, districts: [
                {..., municipalities: [
                    {..., wards: [
                        {..., ward_number, areas: [...]}]}]}]}

        With ``areas_only`` every branch that does not end in an area is
        pruned. Every collection is present (possibly empty) so the client
        can tell "loaded and empty" from "not loaded".
        """
        key = _cache_key('tree', province_id, 'areas' if areas_only else 'all')
        cached = cache.get(key)
        if cached is not None:
            return cached

        try:
            province = Location.objects.get(
                pk=province_id, location_type=Location.LocationType.PROVINCE,
            )
        except (Location.DoesNotExist, ValueError):
            raise ResourceNotFoundError(detail=f'Province {province_id} not found.')

        districts = list(Location.objects.filter(parent=province).order_by('name'))
        municipalities = list(Location.objects.filter(parent__in=districts).order_by('name'))
        wards = list(Location.objects.filter(parent__in=municipalities).order_by('ward_number'))
        areas = list(Location.objects.filter(parent__in=wards).order_by('name'))

        by_parent = defaultdict(list)
        for location in municipalities + wards + areas:
            by_parent[location.parent_id].append(location)

        def build_ward(ward):
            data = node_dict(ward)
            data['areas'] = [node_dict(a) for a in by_parent[ward.pk]]
            return data

        def build_municipality(municipality):
            data = node_dict(municipality)
            wards_data = [build_ward(w) for w in by_parent[municipality.pk]]
            if areas_only:
                wards_data = [w for w in wards_data if w['areas']]
            data['wards'] = wards_data
            return data

        def build_district(district):
            data = node_dict(district)
            municipalities_data = [build_municipality(m) for m in by_parent[district.pk]]
            if areas_only:
                municipalities_data = [m for m in municipalities_data if m['wards']]
            data['municipalities'] = municipalities_data
            return data

        districts_data = [build_district(d) for d in districts]
        if areas_only:
            districts_data = [d for d in districts_data if d['municipalities']]

        tree = node_dict(province)
        tree['districts'] = districts_data

        cache.set(key, tree, _cache_ttl())
        return tree

    @staticmethod
    def search(query: str, areas_only: bool = False, limit: int = SEARCH_RESULT_LIMIT) -> list[dict]:
        """
        Case-insensitive substring search. Prefix matches rank first, then
        alphabetical. Queries shorter than SEARCH_MIN_LENGTH return nothing.
        """
        query = (query or '').strip()
        if len(query) < SEARCH_MIN_LENGTH:
            return []

        qs = Location.objects.filter(name__icontains=query)
        if areas_only:
            qs = qs.filter(location_type=Location.LocationType.AREA)
        qs = qs.select_related(
            'parent__parent__parent__parent',
        ).annotate(
            prefix_rank=Case(
                When(name__istartswith=query, then=Value(0)),
                default=Value(1),
                output_field=IntegerField(),
            ),
        ).order_by('prefix_rank', 'name', 'pk')[:limit]

        results = []
        for location in qs:
            data = node_dict(location)
            data['hierarchy_info'] = location.hierarchy_info
            results.append(data)
        logger.debug('Location search %r (areas_only=%s): %d hits', query, areas_only, len(results))
        return results

    @staticmethod
    def get_location(location_id) -> dict:
        try:
            location = Location.objects.select_related(
                'parent__parent__parent__parent',
            ).get(pk=location_id)
        except (Location.DoesNotExist, ValueError):
            raise ResourceNotFoundError(detail=f'Location {location_id} not found.')
        data = node_dict(location)
        data['hierarchy_info'] = location.hierarchy_info
        return data

    @staticmethod
    def validate_parent(location_type, parent, ward_number=None):
        """Enforce the enclosing-type rule. Raises InvalidHierarchyError."""
        if location_type == Location.LocationType.PROVINCE:
            if parent is not None:
                raise InvalidHierarchyError(detail='Province must not have a parent.')
            return

        if parent is None:
            raise InvalidHierarchyError(detail=f'{location_type} requires a parent.')

        expected = Location.PARENT_TYPE_MAP[location_type]
        if parent.location_type != expected:
            raise InvalidHierarchyError(
                detail=f'{location_type} parent must be a {expected}, got {parent.location_type}.',
            )

        if location_type == Location.LocationType.WARD and ward_number is None:
            raise InvalidHierarchyError(detail='Ward requires a ward_number.')
        if location_type != Location.LocationType.WARD and ward_number is not None:
            raise InvalidHierarchyError(detail='Only wards carry a ward_number.')
