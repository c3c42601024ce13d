"""
Locations — Listing filter tests.

@file locations/tests/test_filtering.py
"""

import pytest

from locations.filtering import AdFilters, LocationIndex, build_search_params
from tests.fakes import sample_payloads


@pytest.fixture
def index():
    return LocationIndex.from_payload(sample_payloads()['provinces'])


class TestLocationIndex:
    def test_lookup_by_name_is_case_insensitive(self, index):
        assert index.get_location_id('Thamel') == 10
        assert index.get_location_id('  thamel ') == 10
        assert index.get_location_id('KATHMANDU') == 11

    def test_all_and_blank_mean_no_location(self, index):
        assert index.get_location_id('all') is None
        assert index.get_location_id('') is None
        assert index.get_location_id('Atlantis') is None

    def test_wards_are_not_indexed(self, index):
        assert index.get_location_id('Ward 3') is None
        assert index.get(1103) is None

    def test_lookup_by_id(self, index):
        assert index.get(20).name == 'Lakeside'
        assert len(index) == 14

    def test_outermost_node_wins_name_clash(self):
        index = LocationIndex.from_payload([
            {
                'id': 1, 'name': 'Kathmandu', 'type': 'province',
                'districts': [{'id': 2, 'name': 'Kathmandu', 'type': 'district', 'municipalities': []}],
            },
        ])
        assert index.get_location_id('Kathmandu') == 1


class TestAdFilters:
    def test_location_select_event_resets_page(self):
        filters = AdFilters(page=4).with_location({'id': 10, 'name': 'Thamel', 'type': 'area'})
        assert filters.location == 'Thamel'
        assert filters.page == 1

    def test_none_event_clears_location(self):
        filters = AdFilters(location='Thamel').with_location(None)
        assert filters.location == 'all'
        assert not filters.has_active_filters

    def test_active_filters(self):
        assert not AdFilters().has_active_filters
        assert AdFilters(min_price='1000').has_active_filters
        assert AdFilters(sort_by='price_low').has_active_filters
        assert AdFilters(condition='new').cleared() == AdFilters()

    def test_with_page_is_clamped(self):
        assert AdFilters().with_page(0).page == 1
        assert AdFilters().with_page('3').page == 3


class TestBuildSearchParams:
    def test_defaults(self):
        assert build_search_params(AdFilters()) == {'sort_by': 'newest', 'limit': 20, 'offset': 0}

    def test_location_name_resolved_to_id(self, index):
        params = build_search_params(AdFilters(location='Thamel', page=3), index, page_size=10)
        assert params['location_id'] == 10
        assert 'location' not in params
        assert params['offset'] == 20

    def test_unknown_location_is_sent_by_name(self, index):
        params = build_search_params(AdFilters(location='Atlantis'), index)
        assert params['location'] == 'Atlantis'
        assert 'location_id' not in params

    def test_all_values_are_omitted(self):
        params = build_search_params(AdFilters(category='vehicles', condition='all', max_price='5000'))
        assert params['category'] == 'vehicles'
        assert params['max_price'] == '5000'
        assert 'condition' not in params

    def test_page_size_is_capped(self):
        assert build_search_params(AdFilters(), page_size=1000)['limit'] == 100
