"""
Core — Constants

Centralised configuration for magic strings and numbers shared across
apps.

@file core/constants.py
"""

# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


# ---------------------------------------------------------------------------
# Locations
# ---------------------------------------------------------------------------

LOCATION_TYPE_PROVINCE = 'province'
LOCATION_TYPE_DISTRICT = 'district'
LOCATION_TYPE_MUNICIPALITY = 'municipality'
LOCATION_TYPE_WARD = 'ward'
LOCATION_TYPE_AREA = 'area'

# Outermost first.
LOCATION_TYPE_ORDER = (
    LOCATION_TYPE_PROVINCE,
    LOCATION_TYPE_DISTRICT,
    LOCATION_TYPE_MUNICIPALITY,
    LOCATION_TYPE_WARD,
    LOCATION_TYPE_AREA,
)

LOCATION_TYPE_LABELS = {
    LOCATION_TYPE_PROVINCE: '🏛 Province',
    LOCATION_TYPE_DISTRICT: '📍 District',
    LOCATION_TYPE_MUNICIPALITY: '🏙 Municipality',
    LOCATION_TYPE_WARD: '🏘 Ward',
    LOCATION_TYPE_AREA: '📌 Area',
}

SEARCH_MIN_LENGTH = 2
SEARCH_RESULT_LIMIT = 20
SEARCH_DEBOUNCE_SECONDS = 0.3

LOCATIONS_CACHE_TTL = 3600  # seconds
LOCATIONS_CACHE_PREFIX = 'locations'
