"""
Location Selector — Component

The location picker used by the post-ad form (area-only) and the
listings filter panel (all-levels). Composes the hierarchy cache, the
selection resolver and the search autocomplete, and keeps the small
amount of UI state around them (loading flags, non-fatal errors).

Fetch failures never reach the resolver or the on_location_select
listener; they end up in ``load_error`` / ``expand_error`` /
``autocomplete.error`` and the user retries by repeating the action.

@file locations/selector/component.py
"""

import logging
from dataclasses import dataclass

from core.constants import LOCATION_TYPE_LABELS, SEARCH_DEBOUNCE_SECONDS

from .cache import HierarchyCache
from .exceptions import FetchError
from .resolver import SelectionResolver
from .search import LocationAutocomplete
from .types import LEVELS, LocationType, SelectorMode

logger = logging.getLogger('classifieds')

# Levels offered as dropdowns. In all-levels mode wards and areas are
# reachable through search only.
CASCADE_LEVELS = {
    SelectorMode.AREA_ONLY: LEVELS,
    SelectorMode.ALL_LEVELS: LEVELS[:3],
}

HELP_TEXT = {
    SelectorMode.AREA_ONLY: 'Select a specific area/place (e.g., Thamel, Naxal) for your ad',
    SelectorMode.ALL_LEVELS: 'Select any location level to filter results',
}


@dataclass
class SelectorConfig:
    mode: SelectorMode = SelectorMode.AREA_ONLY
    initial_selection_id: int | None = None
    required: bool = False
    label: str = 'Select Location'
    placeholder: str = 'Search location...'
    debounce_seconds: float = SEARCH_DEBOUNCE_SECONDS

    def __post_init__(self):
        self.mode = SelectorMode(self.mode)

    @classmethod
    def from_settings(cls, **kwargs):
        from django.conf import settings

        conf = getattr(settings, 'LOCATION_SELECTOR', {})
        kwargs.setdefault('debounce_seconds', conf.get('SEARCH_DEBOUNCE_SECONDS', SEARCH_DEBOUNCE_SECONDS))
        return cls(**kwargs)


class LocationSelector:
    """
    Usage::

        selector = LocationSelector(client, on_location_select=form.set_location,
                                    config=SelectorConfig(mode='area-only'))
        await selector.mount()
        await selector.choose_province(1)
        ...
        selector.unmount()
    """

    def __init__(self, service, on_location_select=None, config=None):
        self.config = config or SelectorConfig()
        self.cache = HierarchyCache(service, self.config.mode)
        self.resolver = SelectionResolver(self._notify, mode=self.config.mode)
        self.autocomplete = LocationAutocomplete(
            self.cache, debounce_seconds=self.config.debounce_seconds,
        )
        self._listener = on_location_select
        self._pending = 0
        self._unmounted = False
        self.load_error = None
        self.expand_error = None

    @property
    def mode(self) -> SelectorMode:
        return self.config.mode

    @property
    def is_loading(self) -> bool:
        return self._pending > 0

    @property
    def provinces(self):
        return self.cache.provinces or []

    def _notify(self, selection):
        if self._unmounted:
            return
        if self._listener is not None:
            self._listener(selection)

    # -- lifecycle ---------------------------------------------------------

    async def mount(self):
        loaded = await self.load()
        if loaded and self.config.initial_selection_id is not None:
            await self._restore_initial(self.config.initial_selection_id)

    async def load(self) -> bool:
        """Load the province roots. Safe to call again after a failure."""
        if self._unmounted:
            return False
        self._pending += 1
        try:
            await self.cache.load_root()
        except FetchError as exc:
            logger.warning('Failed to load location hierarchy: %s', exc)
            self.load_error = str(exc)
            return False
        finally:
            self._pending -= 1
        self.load_error = None
        return True

    async def _restore_initial(self, location_id):
        self._pending += 1
        try:
            node = await self.cache.resolve(location_id)
        except FetchError as exc:
            logger.warning('Failed to resolve initial location %s: %s', location_id, exc)
            return
        finally:
            self._pending -= 1
        if self._unmounted:
            return
        self.resolver.restore(node)
        self.autocomplete.term = node.name

    def unmount(self):
        self._unmounted = True
        self.cache.close()
        self.autocomplete.close()

    # -- cascade -----------------------------------------------------------

    def options(self, level):
        """Nodes offered by the dropdown for ``level`` (empty until loaded)."""
        level = LocationType(level)
        if level is LocationType.PROVINCE:
            return self.provinces
        parent = self.resolver[level.parent]
        if parent is None or parent.children is None:
            return []
        return parent.children

    @property
    def visible_levels(self) -> tuple:
        """
        Dropdowns to show: a level appears once its parent is selected
        and the parent's children are loaded.
        """
        visible = []
        for level in CASCADE_LEVELS[self.mode]:
            if level is LocationType.PROVINCE:
                visible.append(level)
                continue
            parent = self.resolver[level.parent]
            if parent is None or parent.children is None:
                break
            visible.append(level)
        return tuple(visible)

    def _find(self, level, predicate):
        for node in self.options(level):
            if predicate(node):
                return node
        return None

    async def choose_province(self, province_id):
        """
        Select a province (``None`` or an unknown id deselects) and load
        its subtree when needed. A failed load leaves the cascade capped
        at the province; choosing it again retries.
        """
        province = self._find(LocationType.PROVINCE, lambda p: p.id == province_id)
        self.resolver.set_slot(LocationType.PROVINCE, province)
        if province is None or province.districts is not None or self.cache.closed:
            return

        self._pending += 1
        try:
            await self.cache.expand_province(province.id)
        except FetchError as exc:
            logger.warning('Failed to load province %s: %s', province.id, exc)
            self.expand_error = str(exc)
            return
        finally:
            self._pending -= 1
        self.expand_error = None

    def choose_district(self, district_id):
        node = self._find(LocationType.DISTRICT, lambda d: d.id == district_id)
        return self.resolver.set_slot(LocationType.DISTRICT, node)

    def choose_municipality(self, municipality_id):
        node = self._find(LocationType.MUNICIPALITY, lambda m: m.id == municipality_id)
        return self.resolver.set_slot(LocationType.MUNICIPALITY, node)

    def choose_ward(self, ward_number):
        node = self._find(LocationType.WARD, lambda w: w.ward_number == ward_number)
        return self.resolver.set_slot(LocationType.WARD, node)

    def choose_area(self, area_id):
        node = self._find(LocationType.AREA, lambda a: a.id == area_id)
        if node is None:
            # An empty option on the area dropdown is not a deselection.
            return False
        return self.resolver.set_slot(LocationType.AREA, node)

    # -- search ------------------------------------------------------------

    def on_search_input(self, text):
        self.autocomplete.on_input(text)

    def choose_search_result(self, result):
        self.resolver.select_from_search(result)
        self.autocomplete.select(result)

    # -- output ------------------------------------------------------------

    def clear(self):
        self.resolver.clear()
        self.autocomplete.reset()

    @property
    def selected_location(self):
        return self.resolver.selected_node

    @property
    def selection(self):
        return self.resolver.selection

    @property
    def is_complete(self) -> bool:
        return self.selected_location is not None

    @property
    def is_valid(self) -> bool:
        return self.is_complete or not self.config.required

    @property
    def validation_error(self):
        if self.is_valid:
            return None
        return 'Please select an area.' if self.mode is SelectorMode.AREA_ONLY else 'Please select a location.'

    @property
    def display_label(self):
        node = self.selected_location
        if node is None:
            return ''
        type_label = LOCATION_TYPE_LABELS.get(node.type.value, node.type.value)
        return f'📍 {node.name} ({type_label})'

    @property
    def help_text(self) -> str:
        return HELP_TEXT[self.mode]
