"""
Location Selector

Client-side location picker: hierarchy cache, selection resolver,
debounced search and the component composing them.

@file locations/selector/__init__.py
"""

from .cache import HierarchyCache
from .client import LocationServiceClient
from .component import LocationSelector, SelectorConfig
from .exceptions import FetchError, LocationNotLoadedError, SelectorError
from .resolver import SelectionResolver
from .search import LocationAutocomplete
from .types import (
    LEVELS,
    District,
    LocationNode,
    LocationType,
    Municipality,
    Province,
    SearchResult,
    SelectorMode,
    Ward,
)

__all__ = [
    'LEVELS',
    'District',
    'FetchError',
    'HierarchyCache',
    'LocationAutocomplete',
    'LocationNode',
    'LocationNotLoadedError',
    'LocationSelector',
    'LocationServiceClient',
    'LocationType',
    'Municipality',
    'Province',
    'SearchResult',
    'SelectionResolver',
    'SelectorConfig',
    'SelectorError',
    'SelectorMode',
    'Ward',
]
