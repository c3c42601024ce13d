"""
Location Selector — Node Types

Client-side view of the location hierarchy. Child collections are
``None`` until fetched and a (possibly empty) list afterwards; the two
must never be confused.

@file locations/selector/types.py
"""

from dataclasses import dataclass
from enum import Enum

from core.constants import LOCATION_TYPE_ORDER


class LocationType(str, Enum):
    PROVINCE = 'province'
    DISTRICT = 'district'
    MUNICIPALITY = 'municipality'
    WARD = 'ward'
    AREA = 'area'

    @property
    def depth(self) -> int:
        return LOCATION_TYPE_ORDER.index(self.value)

    @property
    def parent(self) -> 'LocationType | None':
        if self.depth == 0:
            return None
        return LocationType(LOCATION_TYPE_ORDER[self.depth - 1])

    @property
    def child(self) -> 'LocationType | None':
        if self.depth == len(LOCATION_TYPE_ORDER) - 1:
            return None
        return LocationType(LOCATION_TYPE_ORDER[self.depth + 1])


LEVELS = tuple(LocationType(value) for value in LOCATION_TYPE_ORDER)


class SelectorMode(str, Enum):
    # Only paths ending in an area; used when posting a listing.
    AREA_ONLY = 'area-only'
    # Any level; used for filtering listings.
    ALL_LEVELS = 'all-levels'


@dataclass(eq=False)
class LocationNode:
    id: int | None
    name: str
    type: LocationType
    parent_id: int | None = None

    # Name of the attribute holding this node's children, if any.
    child_attr = None

    @property
    def key(self) -> tuple:
        return (self.type, self.id)

    @property
    def children(self):
        if self.child_attr is None:
            return None
        return getattr(self, self.child_attr)

    def as_selection(self) -> dict:
        """The flattened {id, name, type} reported to listeners."""
        return {'id': self.id, 'name': self.name, 'type': self.type.value}

    def __eq__(self, other):
        if not isinstance(other, LocationNode):
            return NotImplemented
        return self.key == other.key

    def __hash__(self):
        return hash(self.key)


@dataclass(eq=False)
class Ward(LocationNode):
    """
    Ward numbers restart at 1 in every municipality, so a ward is
    identified by (municipality id, ward_number). ``parent_id`` is the
    municipality id.
    """

    ward_number: int = 0
    areas: list[LocationNode] | None = None

    child_attr = 'areas'

    @property
    def municipality_id(self) -> int | None:
        return self.parent_id

    @property
    def key(self) -> tuple:
        return (self.type, self.parent_id, self.ward_number)


@dataclass(eq=False)
class Municipality(LocationNode):
    wards: list[Ward] | None = None

    child_attr = 'wards'


@dataclass(eq=False)
class District(LocationNode):
    municipalities: list[Municipality] | None = None

    child_attr = 'municipalities'


@dataclass(eq=False)
class Province(LocationNode):
    districts: list[District] | None = None

    child_attr = 'districts'


@dataclass(eq=False)
class SearchResult(LocationNode):
    """
    A search hit. Ward hits keep their ward_number and take the same
    (municipality id, ward_number) key as a ward from the cascade.
    """

    hierarchy_info: str = ''
    ward_number: int | None = None

    @property
    def key(self) -> tuple:
        if self.type is LocationType.WARD and self.ward_number is not None:
            return (self.type, self.parent_id, self.ward_number)
        return super().key


# ---------------------------------------------------------------------------
# Wire parsing
# ---------------------------------------------------------------------------

def _children(data, key, parse, parent_id):
    if data.get(key) is None:
        return None
    return [parse(child, parent_id) for child in data[key]]


def parse_node(data, parent_id=None) -> LocationNode:
    return LocationNode(
        id=data.get('id'),
        name=data['name'],
        type=LocationType(data['type']),
        parent_id=data.get('parent_id', parent_id),
    )


def parse_ward(data, municipality_id=None) -> Ward:
    # The ward's own parent_id on the wire is ignored in favour of the
    # enclosing municipality, which is what makes the composite key unique.
    ward_number = int(data['ward_number'])
    municipality_id = municipality_id if municipality_id is not None else data.get('parent_id')
    return Ward(
        id=data.get('id'),
        name=data.get('name') or f'Ward {ward_number}',
        type=LocationType.WARD,
        parent_id=municipality_id,
        ward_number=ward_number,
        areas=_children(data, 'areas', parse_node, data.get('id')),
    )


def parse_municipality(data, district_id=None) -> Municipality:
    return Municipality(
        id=data['id'],
        name=data['name'],
        type=LocationType.MUNICIPALITY,
        parent_id=data.get('parent_id', district_id),
        wards=_children(data, 'wards', parse_ward, data['id']),
    )


def parse_district(data, province_id=None) -> District:
    return District(
        id=data['id'],
        name=data['name'],
        type=LocationType.DISTRICT,
        parent_id=data.get('parent_id', province_id),
        municipalities=_children(data, 'municipalities', parse_municipality, data['id']),
    )


def parse_province(data) -> Province:
    return Province(
        id=data['id'],
        name=data['name'],
        type=LocationType.PROVINCE,
        parent_id=None,
        districts=_children(data, 'districts', parse_district, data['id']),
    )


def parse_province_subtree(payload, province_id) -> list[District]:
    """A province subtree arrives either as {districts: [...]} or as the bare list."""
    if isinstance(payload, dict):
        districts = payload.get('districts')
        if districts is None:
            raise ValueError('Province subtree payload has no districts')
    else:
        districts = payload
    return [parse_district(d, province_id) for d in districts]


def parse_search_result(data) -> SearchResult:
    location_type = LocationType(data['type'])
    ward_number = data.get('ward_number')
    if location_type is LocationType.WARD and ward_number is not None:
        ward_number = int(ward_number)
    else:
        ward_number = None
    return SearchResult(
        id=data.get('id'),
        name=data['name'],
        type=location_type,
        parent_id=data.get('parent_id'),
        hierarchy_info=data.get('hierarchy_info') or '',
        ward_number=ward_number,
    )


def walk(nodes):
    """Yield every node of a (partially loaded) forest, parents before children."""
    for node in nodes or []:
        yield node
        yield from walk(node.children)
