"""
Locations — Management Command: seed_locations

Loads the five-level location hierarchy (Province → District →
Municipality → Ward → Area) from a nested JSON file.

Usage::

    python manage.py seed_locations
    python manage.py seed_locations --file path/to/locations.json

Idempotent: safe to re-run (uses get_or_create on natural keys).

@file locations/management/commands/seed_locations.py
"""

import json
import logging
from collections import Counter
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from locations.models import Location

logger = logging.getLogger('classifieds')

DEFAULT_FILE = Path(__file__).resolve().parents[2] / 'fixtures' / 'nepal_locations.json'


class Command(BaseCommand):
    help = 'Seed the location hierarchy from a nested JSON file.'

    def add_arguments(self, parser):
        parser.add_argument(
            '--file',
            type=str,
            help='Path to a JSON file (defaults to the bundled sample).',
        )

    def handle(self, *args, **options):
        path = Path(options.get('file') or DEFAULT_FILE)
        if not path.exists():
            raise CommandError(f'File not found: {path}')

        self.stdout.write(f'Loading location hierarchy from {path}')
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        counter = Counter()
        with transaction.atomic():
            self._process_data(data, counter)

        self.stdout.write(self.style.SUCCESS(
            f'Done. Provinces: {counter["province"]}, Districts: {counter["district"]}, '
            f'Municipalities: {counter["municipality"]}, Wards: {counter["ward"]}, '
            f'Areas: {counter["area"]}'
        ))

    def _get_or_create(self, name, location_type, parent, counter):
        location, _ = Location.objects.get_or_create(
            name=name.strip(),
            location_type=location_type,
            parent=parent,
        )
        counter[location_type] += 1
        return location

    def _process_data(self, data, counter):
        """
        Expected JSON shape:

        [
          {
            "name": "Bagmati",
            "districts": [
              {
                "name": "Kathmandu",
                "municipalities": [
                  {
                    "name": "Kathmandu Metropolitan City",
                    "wards": [
                      {"ward_number": 26, "areas": ["Thamel", "Paknajol"]}
                    ]
                  }
                ]
              }
            ]
          }
        ]
        """
        if isinstance(data, dict):
            provinces = data.get('provinces', data.get('data', [data]))
        elif isinstance(data, list):
            provinces = data
        else:
            raise CommandError('Unexpected JSON structure.')

        for province_data in provinces:
            province_name = province_data.get('name', '')
            if not province_name:
                continue
            province = self._get_or_create(
                province_name, Location.LocationType.PROVINCE, None, counter,
            )
            self.stdout.write(f'  Province: {province_name}')

            for district_data in province_data.get('districts', []):
                if isinstance(district_data, str):
                    district_data = {'name': district_data}
                if not district_data.get('name'):
                    continue
                district = self._get_or_create(
                    district_data['name'], Location.LocationType.DISTRICT, province, counter,
                )

                for municipality_data in district_data.get('municipalities', []):
                    if isinstance(municipality_data, str):
                        municipality_data = {'name': municipality_data}
                    if not municipality_data.get('name'):
                        continue
                    municipality = self._get_or_create(
                        municipality_data['name'], Location.LocationType.MUNICIPALITY,
                        district, counter,
                    )

                    for ward_data in municipality_data.get('wards', []):
                        if isinstance(ward_data, int):
                            ward_data = {'ward_number': ward_data}
                        ward_number = ward_data.get('ward_number')
                        if ward_number is None:
                            continue
                        ward, _ = Location.objects.get_or_create(
                            parent=municipality,
                            location_type=Location.LocationType.WARD,
                            ward_number=int(ward_number),
                            defaults={'name': f'Ward {ward_number}'},
                        )
                        counter['ward'] += 1

                        for area_data in ward_data.get('areas', []):
                            area_name = area_data if isinstance(area_data, str) else area_data.get('name', '')
                            if not area_name:
                                continue
                            self._get_or_create(
                                area_name, Location.LocationType.AREA, ward, counter,
                            )
