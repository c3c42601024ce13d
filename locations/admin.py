"""
Locations — Django Admin Configuration

Tree-like display of locations with parent chain, filter by
location_type, and proper search.

@file locations/admin.py
"""

from django.contrib import admin
from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _

from .models import Location


@admin.register(Location)
class LocationAdmin(admin.ModelAdmin):
    """Admin for the Province → District → Municipality → Ward → Area hierarchy."""

    list_display = (
        'name', 'location_type_badge', 'ward_number', 'parent_display',
        'children_count', 'created_at',
    )
    list_filter = ('location_type',)
    search_fields = ('name',)
    readonly_fields = ('id', 'created_at', 'updated_at')
    raw_id_fields = ('parent',)
    list_select_related = ('parent',)
    show_full_result_count = False
    list_per_page = 50
    ordering = ('location_type', 'name')

    fieldsets = (
        (None, {
            'fields': ('id', 'name', 'location_type', 'parent', 'ward_number'),
        }),
        (_('Timestamps'), {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    @admin.display(description=_('Type'))
    def location_type_badge(self, obj):
        colors = {
            'province': '#1d4ed8',
            'district': '#7c3aed',
            'municipality': '#0891b2',
            'ward': '#65a30d',
            'area': '#d97706',
        }
        color = colors.get(obj.location_type, '#6b7280')
        return format_html(
            '<span style="background:{}; color:#fff; padding:2px 8px; '
            'border-radius:4px; font-size:11px; font-weight:600;">{}</span>',
            color, obj.get_location_type_display(),
        )

    @admin.display(description=_('Parent'))
    def parent_display(self, obj):
        if obj.parent:
            return f'{obj.parent.name} ({obj.parent.get_location_type_display()})'
        return '-'

    @admin.display(description=_('Children'))
    def children_count(self, obj):
        return obj.children.count()
