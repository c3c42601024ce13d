"""
Locations — seed_locations command tests.

@file locations/tests/test_seed_locations.py
"""

import json

import pytest
from django.core.management import CommandError, call_command

from locations.models import Location


pytestmark = pytest.mark.django_db


def test_seeds_bundled_sample():
    call_command('seed_locations')
    assert Location.objects.filter(location_type='province').count() == 3
    thamel = Location.objects.get(name='Thamel')
    assert thamel.parent.ward_number == 26
    assert thamel.hierarchy_info == 'Thamel, Ward 26, Kathmandu Metropolitan City, Kathmandu, Bagmati'


def test_is_idempotent():
    call_command('seed_locations')
    total = Location.objects.count()
    call_command('seed_locations')
    assert Location.objects.count() == total


def test_reused_ward_numbers_stay_distinct():
    call_command('seed_locations')
    wards = Location.objects.filter(location_type='ward', ward_number=3)
    assert {w.parent.name for w in wards} == {
        'Kathmandu Metropolitan City', 'Budhanilkantha Municipality',
    }


def test_custom_file(tmp_path):
    path = tmp_path / 'locations.json'
    path.write_text(json.dumps([
        {'name': 'Koshi', 'districts': [
            {'name': 'Morang', 'municipalities': [
                {'name': 'Biratnagar', 'wards': [{'ward_number': 4, 'areas': ['Traffic Chowk']}]},
            ]},
        ]},
    ]), encoding='utf-8')
    call_command('seed_locations', file=str(path))
    area = Location.objects.get(name='Traffic Chowk')
    assert area.full_path == 'Koshi > Morang > Biratnagar > Ward 4 > Traffic Chowk'


def test_missing_file(tmp_path):
    with pytest.raises(CommandError):
        call_command('seed_locations', file=str(tmp_path / 'nope.json'))
