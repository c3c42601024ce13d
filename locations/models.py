"""
Locations — Models

Self-referencing Location model representing Nepal's administrative
subdivision used by listings:
Province → District → Municipality → Ward → Area.

Parent-child integrity is enforced via CheckConstraint at the DB level;
the parent *type* rule lives in LocationService.validate_parent.

@file locations/models.py
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

from core.models import BaseModel


class Location(BaseModel):
    """
    One node of the location hierarchy.

    Wards are addressed by ``ward_number`` scoped to their municipality;
    ward numbers 1..N repeat across municipalities, so the pair
    (parent, ward_number) is the ward's natural key.
    """

    class LocationType(models.TextChoices):
        PROVINCE = 'province', _('Province')
        DISTRICT = 'district', _('District')
        MUNICIPALITY = 'municipality', _('Municipality')
        WARD = 'ward', _('Ward')
        AREA = 'area', _('Area')

    PARENT_TYPE_MAP = {
        'district': 'province',
        'municipality': 'district',
        'ward': 'municipality',
        'area': 'ward',
    }

    name = models.CharField(_('name'), max_length=150, db_index=True)
    location_type = models.CharField(
        _('location type'), max_length=15,
        choices=LocationType.choices, db_index=True,
    )
    parent = models.ForeignKey(
        'self',
        null=True, blank=True,
        on_delete=models.CASCADE,
        related_name='children',
        verbose_name=_('parent'),
    )
    ward_number = models.PositiveSmallIntegerField(
        _('ward number'), null=True, blank=True,
    )

    class Meta:
        verbose_name = _('location')
        verbose_name_plural = _('locations')
        ordering = ['location_type', 'name']
        indexes = [
            models.Index(fields=['location_type', 'parent']),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(
                    models.Q(location_type='province', parent__isnull=True)
                    | models.Q(
                        location_type__in=['district', 'municipality', 'ward', 'area'],
                        parent__isnull=False,
                    )
                ),
                name='valid_location_parent_nullability',
            ),
            models.CheckConstraint(
                condition=(
                    models.Q(location_type='ward', ward_number__isnull=False)
                    | (~models.Q(location_type='ward') & models.Q(ward_number__isnull=True))
                ),
                name='ward_number_only_on_wards',
            ),
            models.UniqueConstraint(
                fields=['parent', 'ward_number'],
                condition=models.Q(location_type='ward'),
                name='unique_ward_number_per_municipality',
            ),
        ]

    def save(self, *args, **kwargs):
        if self.location_type == self.LocationType.WARD and not self.name:
            self.name = f'Ward {self.ward_number}'
        super().save(*args, **kwargs)

    def __str__(self):
        return f'{self.name} ({self.get_location_type_display()})'

    @property
    def ancestors(self) -> list['Location']:
        """Parent chain, nearest first."""
        chain = []
        current = self.parent
        while current:
            chain.append(current)
            current = current.parent
        return chain

    @property
    def hierarchy_info(self) -> str:
        """Human-readable path, nearest first: 'Thamel, Ward 26, Kathmandu, ...'."""
        return ', '.join([self.name] + [a.name for a in self.ancestors])

    @property
    def full_path(self) -> str:
        """Root-first path, e.g. 'Bagmati > Kathmandu > ... > Thamel'."""
        return ' > '.join([a.name for a in reversed(self.ancestors)] + [self.name])
