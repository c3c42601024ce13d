"""
Location Selector — component tests.

@file locations/tests/test_selector_component.py
"""

import asyncio

import pytest

from locations.selector.component import LocationSelector, SelectorConfig
from locations.selector.types import LocationType, SelectorMode


pytestmark = pytest.mark.asyncio


@pytest.fixture
def events():
    return []


def make_selector(service, events, **config):
    config.setdefault('debounce_seconds', 0.01)
    return LocationSelector(service, events.append, SelectorConfig(**config))


class TestCascade:
    async def test_post_ad_scenario(self, fake_service, events):
        selector = make_selector(fake_service, events, mode='area-only')
        await selector.mount()
        await selector.choose_province(1)
        selector.choose_district(11)
        selector.choose_municipality(111)
        selector.choose_ward(3)
        selector.choose_area(9)

        assert len(events) == 5
        assert events[-1] == {'id': 9, 'name': 'Maharajgunj', 'type': 'area'}
        assert selector.is_complete
        assert selector.display_label == '📍 Maharajgunj (📌 Area)'

        selector.resolver.set_slot(LocationType.DISTRICT, None)
        assert events[-1] is None
        assert not selector.is_complete

    async def test_province_expansion_is_lazy_and_cached(self, fake_service, events):
        selector = make_selector(fake_service, events)
        await selector.mount()
        assert fake_service.count('get_areas_hierarchy', 1) == 0
        await selector.choose_province(1)
        await selector.choose_province(2)
        await selector.choose_province(1)
        assert fake_service.count('get_areas_hierarchy', 1) == 1
        assert selector.resolver.province.districts is not None

    async def test_visible_levels_follow_selection_and_loading(self, fake_service, events):
        selector = make_selector(fake_service, events, mode='area-only')
        await selector.mount()
        assert selector.visible_levels == (LocationType.PROVINCE,)

        await selector.choose_province(1)
        selector.choose_district(11)
        selector.choose_municipality(111)
        assert selector.visible_levels == (
            LocationType.PROVINCE, LocationType.DISTRICT,
            LocationType.MUNICIPALITY, LocationType.WARD,
        )
        assert [w.ward_number for w in selector.options(LocationType.WARD)] == [3, 26]

        selector.choose_ward(26)
        assert selector.visible_levels[-1] is LocationType.AREA
        assert [a.name for a in selector.options('area')] == ['Thamel', 'Paknajol']

    async def test_all_levels_cascade_stops_at_municipality(self, fake_service, events):
        selector = make_selector(fake_service, events, mode='all-levels')
        await selector.mount()
        await selector.choose_province(1)
        selector.choose_district(11)
        assert events[-1] == {'id': 11, 'name': 'Kathmandu', 'type': 'district'}
        assert selector.is_complete

        selector.choose_municipality(111)
        assert selector.visible_levels == (
            LocationType.PROVINCE, LocationType.DISTRICT, LocationType.MUNICIPALITY,
        )
        assert events[-1]['type'] == 'municipality'

    async def test_all_levels_district_without_areas_is_selectable(self, sparse_service, events):
        selector = make_selector(sparse_service, events, mode='all-levels')
        await selector.mount()
        await selector.choose_province(1)
        assert [d.id for d in selector.options('district')] == [11, 12]

        assert selector.choose_district(12)
        assert events[-1] == {'id': 12, 'name': 'Bhaktapur', 'type': 'district'}
        assert selector.options('municipality') == []
        assert sparse_service.calls[:2] == [('get_hierarchy', None), ('get_hierarchy', 1)]

    async def test_ward_number_is_scoped_to_selected_municipality(self, fake_service, events):
        selector = make_selector(fake_service, events)
        await selector.mount()
        await selector.choose_province(1)
        selector.choose_district(11)

        selector.choose_municipality(111)
        selector.choose_ward(3)
        kmc_ward = selector.resolver.ward

        selector.choose_municipality(112)
        selector.choose_ward(3)
        bud_ward = selector.resolver.ward

        assert kmc_ward is not bud_ward
        assert kmc_ward.key != bud_ward.key
        assert [a.name for a in selector.options('area')] == ['Narayanthan']

    async def test_unknown_id_deselects(self, fake_service, events):
        selector = make_selector(fake_service, events, mode='all-levels')
        await selector.mount()
        await selector.choose_province(1)
        selector.choose_district(11)
        selector.choose_district(999)
        assert selector.resolver.district is None
        assert events[-1]['type'] == 'province'

    async def test_is_loading_while_expanding(self, fake_service, events):
        selector = make_selector(fake_service, events)
        await selector.mount()
        gate = fake_service.hold('get_areas_hierarchy', 1)
        pending = asyncio.ensure_future(selector.choose_province(1))
        await asyncio.sleep(0)
        assert selector.is_loading
        gate.set()
        await pending
        assert not selector.is_loading


class TestFailures:
    async def test_failed_root_load_is_retryable(self, fake_service, events):
        selector = make_selector(fake_service, events)
        fake_service.fail_next('get_areas_hierarchy')
        await selector.mount()
        assert selector.provinces == []
        assert selector.load_error
        assert events == []

        assert await selector.load()
        assert selector.load_error is None
        assert [p.name for p in selector.provinces] == ['Bagmati', 'Gandaki']

    async def test_failed_expansion_caps_cascade_at_province(self, fake_service, events):
        selector = make_selector(fake_service, events)
        await selector.mount()
        fake_service.fail_next('get_areas_hierarchy')
        await selector.choose_province(1)
        assert selector.expand_error
        assert selector.visible_levels == (LocationType.PROVINCE,)
        assert selector.resolver.province.id == 1

        await selector.choose_province(1)
        assert selector.expand_error is None
        assert LocationType.DISTRICT in selector.visible_levels

    async def test_failed_search_does_not_touch_selection(self, fake_service, events):
        selector = make_selector(fake_service, events)
        await selector.mount()
        fake_service.fail_next('search_areas')
        selector.on_search_input('thamel')
        await selector.autocomplete.wait_idle()
        assert selector.autocomplete.results == []
        assert selector.autocomplete.error
        assert events == []


class TestSearchSelection:
    async def test_search_pick_sets_area_and_keeps_stale_ancestors(self, fake_service, events):
        selector = make_selector(fake_service, events)
        await selector.mount()
        await selector.choose_province(1)
        selector.choose_district(11)

        selector.on_search_input('lakeside')
        await selector.autocomplete.wait_idle()
        [lakeside] = selector.autocomplete.results
        selector.choose_search_result(lakeside)

        assert events[-1] == {'id': 20, 'name': 'Lakeside', 'type': 'area'}
        assert selector.resolver.province.name == 'Bagmati'
        assert selector.resolver.district.name == 'Kathmandu'
        assert selector.autocomplete.term == 'Lakeside'
        assert not selector.autocomplete.is_open
        assert selector.autocomplete.results == []

    async def test_clear(self, fake_service, events):
        selector = make_selector(fake_service, events)
        await selector.mount()
        selector.on_search_input('thamel')
        await selector.autocomplete.wait_idle()
        selector.choose_search_result(selector.autocomplete.results[0])
        selector.clear()
        assert events[-1] is None
        assert selector.autocomplete.term == ''
        assert selector.selected_location is None


class TestConfig:
    async def test_initial_selection_is_restored_silently(self, fake_service, events):
        selector = make_selector(fake_service, events, initial_selection_id=10)
        await selector.mount()
        assert events == []
        assert selector.selection == {'id': 10, 'name': 'Thamel', 'type': 'area'}
        assert selector.autocomplete.term == 'Thamel'

    async def test_required(self, fake_service, events):
        selector = make_selector(fake_service, events, required=True)
        await selector.mount()
        assert not selector.is_valid
        assert selector.validation_error == 'Please select an area.'

        optional = make_selector(fake_service, events)
        assert optional.is_valid
        assert optional.validation_error is None

    async def test_help_text_per_mode(self, fake_service, events):
        assert 'Thamel' in make_selector(fake_service, events).help_text
        assert make_selector(fake_service, events, mode='all-levels').help_text == (
            'Select any location level to filter results'
        )

    async def test_mode_is_normalised(self):
        assert SelectorConfig(mode='all-levels').mode is SelectorMode.ALL_LEVELS

    async def test_from_settings(self, settings):
        settings.LOCATION_SELECTOR = {'SEARCH_DEBOUNCE_SECONDS': 0.5}
        config = SelectorConfig.from_settings(mode='area-only')
        assert config.debounce_seconds == 0.5


class TestUnmount:
    async def test_no_events_or_mutation_after_unmount(self, fake_service, events):
        selector = make_selector(fake_service, events)
        await selector.mount()
        gate = fake_service.hold('get_areas_hierarchy', 1)
        pending = asyncio.ensure_future(selector.choose_province(1))
        await asyncio.sleep(0)
        emitted = len(events)
        selector.unmount()
        gate.set()
        await pending

        assert selector.cache.get_province(1).districts is None
        selector.clear()
        assert len(events) == emitted
        assert await selector.load() is False
