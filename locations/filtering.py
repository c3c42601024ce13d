"""
Locations — Listing Filters

Glue between the location selector and the ads listing query: an O(1)
name/id index over the full hierarchy, the listing filter state, and the
query-parameter builder for the ads endpoint.

@file locations/filtering.py
"""

from dataclasses import dataclass, replace

from core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

from .selector.types import LocationType, parse_province, walk

ALL = 'all'


class LocationIndex:
    """
    Lookup tables over a loaded hierarchy.

    Names are matched case-insensitively. When a name occurs at several
    levels the outermost node wins; ward names ("Ward 3") repeat across
    municipalities and are not indexed by name.
    """

    def __init__(self, provinces):
        self.by_id = {}
        self.by_name = {}
        for node in walk(provinces):
            if node.type is not LocationType.WARD and node.id is not None:
                self.by_id[node.id] = node
                key = node.name.strip().lower()
                current = self.by_name.get(key)
                if current is None or node.type.depth < current.type.depth:
                    self.by_name[key] = node

    @classmethod
    def from_payload(cls, payload):
        """Build from the nested province list the hierarchy endpoints return."""
        return cls([parse_province(p) for p in payload or []])

    def __len__(self):
        return len(self.by_id)

    def get(self, location_id):
        return self.by_id.get(location_id)

    def get_location_id(self, name):
        if not name or name == ALL:
            return None
        node = self.by_name.get(name.strip().lower())
        return node.id if node is not None else None


@dataclass(frozen=True)
class AdFilters:
    category: str = ALL
    subcategory: str = ''
    location: str = ALL
    min_price: str = ''
    max_price: str = ''
    condition: str = ALL
    sort_by: str = 'newest'
    page: int = 1

    def with_location(self, selection):
        """Apply an on_location_select event; ``None`` clears the location filter."""
        location = selection['name'] if selection else ALL
        return replace(self, location=location, page=1)

    def with_page(self, page):
        return replace(self, page=max(1, int(page)))

    def cleared(self):
        return AdFilters()

    @property
    def has_active_filters(self) -> bool:
        return bool(
            self.category != ALL
            or self.subcategory
            or self.location != ALL
            or self.min_price
            or self.max_price
            or self.condition != ALL
            or self.sort_by != 'newest'
        )


def build_search_params(filters, index=None, page_size=DEFAULT_PAGE_SIZE) -> dict:
    """Query parameters for the ads listing endpoint; 'all' and blanks are omitted."""
    page_size = max(1, min(page_size, MAX_PAGE_SIZE))
    params = {}

    if filters.category != ALL:
        params['category'] = filters.category
    if filters.subcategory:
        params['subcategory'] = filters.subcategory

    if filters.location != ALL:
        location_id = index.get_location_id(filters.location) if index is not None else None
        if location_id is not None:
            params['location_id'] = location_id
        else:
            params['location'] = filters.location

    if filters.min_price:
        params['min_price'] = filters.min_price
    if filters.max_price:
        params['max_price'] = filters.max_price
    if filters.condition != ALL:
        params['condition'] = filters.condition

    params['sort_by'] = filters.sort_by
    params['limit'] = page_size
    params['offset'] = (filters.page - 1) * page_size
    return params
