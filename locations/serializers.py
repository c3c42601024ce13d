"""
Locations — Serializers

Read and write serializers for Location.

@file locations/serializers.py
"""

from rest_framework import serializers

from core.exceptions import InvalidHierarchyError

from .models import Location
from .services import LocationService


class LocationReadSerializer(serializers.ModelSerializer):
    """Flat read representation with parent name and ancestor path."""

    type = serializers.CharField(source='location_type', read_only=True)
    parent_id = serializers.IntegerField(read_only=True)
    parent_name = serializers.CharField(source='parent.name', read_only=True, default=None)
    hierarchy_info = serializers.CharField(read_only=True)
    children_count = serializers.SerializerMethodField()

    class Meta:
        model = Location
        fields = [
            'id', 'name', 'type', 'ward_number',
            'parent_id', 'parent_name', 'hierarchy_info',
            'children_count', 'created_at',
        ]
        read_only_fields = fields

    def get_children_count(self, obj):
        return obj.children.count()


class LocationWriteSerializer(serializers.ModelSerializer):
    class Meta:
        model = Location
        fields = ['name', 'location_type', 'parent', 'ward_number']
        # Ward uniqueness is checked in validate() with a field-level error.
        validators = []

    def validate(self, attrs):
        instance = self.instance
        location_type = attrs.get('location_type', getattr(instance, 'location_type', None))
        parent = attrs.get('parent', getattr(instance, 'parent', None))
        ward_number = attrs.get('ward_number', getattr(instance, 'ward_number', None))

        try:
            LocationService.validate_parent(location_type, parent, ward_number)
        except InvalidHierarchyError as exc:
            field = 'ward_number' if 'ward_number' in str(exc.detail) else 'parent'
            raise serializers.ValidationError({field: str(exc.detail)})

        if location_type == Location.LocationType.WARD:
            clash = Location.objects.filter(
                parent=parent, ward_number=ward_number,
                location_type=Location.LocationType.WARD,
            )
            if instance is not None:
                clash = clash.exclude(pk=instance.pk)
            if clash.exists():
                raise serializers.ValidationError(
                    {'ward_number': f'Ward {ward_number} already exists in {parent.name}.'},
                )

        return attrs
