"""
Tests — Locations API endpoints.

@file locations/tests/test_views.py
"""

import pytest
from django.urls import reverse

from locations.models import Location


pytestmark = pytest.mark.django_db


class TestHierarchyEndpoints:

    def test_hierarchy_is_public(self, api_client, hierarchy):
        resp = api_client.get(reverse('api-v1:locations:location-hierarchy'))
        assert resp.status_code == 200
        body = resp.json()
        assert body['success'] is True
        assert [p['name'] for p in body['data']] == ['Bagmati', 'Karnali']

    def test_hierarchy_province_subtree(self, api_client, hierarchy):
        url = reverse('api-v1:locations:location-hierarchy')
        resp = api_client.get(url, {'province_id': hierarchy.karnali.pk})
        assert resp.status_code == 200
        data = resp.json()['data']
        assert data['id'] == hierarchy.karnali.pk
        assert data['districts'][0]['municipalities'][0]['wards'] == []

    def test_areas_hierarchy_roots(self, api_client, hierarchy):
        resp = api_client.get(reverse('api-v1:locations:location-areas-hierarchy'))
        assert [p['id'] for p in resp.json()['data']] == [hierarchy.bagmati.pk]

    def test_areas_hierarchy_subtree(self, api_client, hierarchy):
        url = reverse('api-v1:locations:location-areas-hierarchy')
        resp = api_client.get(url, {'province_id': hierarchy.bagmati.pk})
        districts = resp.json()['data']['districts']
        assert [d['name'] for d in districts] == ['Kathmandu']

    def test_unknown_province_is_404_envelope(self, api_client, hierarchy):
        url = reverse('api-v1:locations:location-areas-hierarchy')
        resp = api_client.get(url, {'province_id': 999999})
        assert resp.status_code == 404
        body = resp.json()
        assert body['success'] is False
        assert body['code'] == 'RESOURCE_NOT_FOUND'


class TestSearchEndpoints:

    def test_search_all_levels(self, api_client, hierarchy):
        resp = api_client.get(reverse('api-v1:locations:location-search'), {'q': 'kath'})
        assert resp.status_code == 200
        types = {r['type'] for r in resp.json()['data']}
        assert types == {'district', 'municipality'}

    def test_search_areas(self, api_client, hierarchy):
        resp = api_client.get(reverse('api-v1:locations:location-areas-search'), {'q': 'tham'})
        data = resp.json()['data']
        assert [r['name'] for r in data] == ['Thamel']
        assert data[0]['hierarchy_info'].startswith('Thamel, Ward 26')

    def test_search_one_character(self, api_client, hierarchy):
        resp = api_client.get(reverse('api-v1:locations:location-search'), {'q': 'k'})
        assert resp.json() == {'success': True, 'data': []}

    def test_node_lookup(self, api_client, hierarchy):
        url = reverse('api-v1:locations:location-node', kwargs={'pk': hierarchy.thamel.pk})
        resp = api_client.get(url)
        assert resp.status_code == 200
        assert resp.json()['data']['name'] == 'Thamel'


class TestLocationCrud:

    def test_list_is_paginated_envelope(self, api_client, hierarchy):
        resp = api_client.get(reverse('api-v1:locations:location-list'), {'location_type': 'area'})
        assert resp.status_code == 200
        body = resp.json()
        assert body['meta']['count'] == 4
        assert {r['type'] for r in body['data']} == {'area'}

    def test_anonymous_cannot_create(self, api_client, hierarchy):
        resp = api_client.post(
            reverse('api-v1:locations:location-list'),
            {'name': 'Gandaki', 'location_type': 'province'},
            format='json',
        )
        assert resp.status_code == 403

    def test_staff_creates_area(self, staff_client, hierarchy):
        resp = staff_client.post(
            reverse('api-v1:locations:location-list'),
            {'name': 'Lazimpat', 'location_type': 'area', 'parent': hierarchy.kmc_ward_3.pk},
            format='json',
        )
        assert resp.status_code == 201
        assert Location.objects.filter(name='Lazimpat', parent=hierarchy.kmc_ward_3).exists()

    def test_wrong_parent_type_rejected(self, staff_client, hierarchy):
        resp = staff_client.post(
            reverse('api-v1:locations:location-list'),
            {'name': 'Lazimpat', 'location_type': 'area', 'parent': hierarchy.kmc.pk},
            format='json',
        )
        assert resp.status_code == 400
        assert 'parent' in resp.json()['errors']

    def test_duplicate_ward_number_rejected(self, staff_client, hierarchy):
        resp = staff_client.post(
            reverse('api-v1:locations:location-list'),
            {'name': 'Ward 3', 'location_type': 'ward', 'parent': hierarchy.kmc.pk, 'ward_number': 3},
            format='json',
        )
        assert resp.status_code == 400
        assert 'ward_number' in resp.json()['errors']

    def test_new_area_appears_in_cached_tree(self, api_client, staff_client, hierarchy):
        url = reverse('api-v1:locations:location-areas-hierarchy')
        api_client.get(url, {'province_id': hierarchy.bagmati.pk})
        staff_client.post(
            reverse('api-v1:locations:location-list'),
            {'name': 'Lazimpat', 'location_type': 'area', 'parent': hierarchy.kmc_ward_3.pk},
            format='json',
        )
        resp = api_client.get(url, {'province_id': hierarchy.bagmati.pk})
        kmc = resp.json()['data']['districts'][0]['municipalities'][1]
        assert 'Lazimpat' in [a['name'] for a in kmc['wards'][0]['areas']]
