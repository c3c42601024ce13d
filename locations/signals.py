"""
Locations — Signals

Invalidate cached hierarchy payloads on any Location write.

@file locations/signals.py
"""

import logging

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .models import Location
from .services import LocationService

logger = logging.getLogger('classifieds')


@receiver(post_save, sender=Location)
@receiver(post_delete, sender=Location)
def location_changed(sender, instance, **kwargs):
    LocationService.invalidate_cache()
    logger.debug('Location %s changed; hierarchy cache invalidated', instance.pk)
