"""
Core — Base Models

Reusable abstract models shared by every app: integer primary key plus
created_at / updated_at timestamps.

@file core/models.py
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class TimestampMixin(models.Model):
    """Adds created_at / updated_at to any model."""

    created_at = models.DateTimeField(
        _('created at'), auto_now_add=True, db_index=True,
    )
    updated_at = models.DateTimeField(
        _('updated at'), auto_now=True,
    )

    class Meta:
        abstract = True


class BaseModel(TimestampMixin):
    """
    Standard base for all Classifieds models.

    Integer PK (ids are exposed to API clients and must stay stable)
    + timestamps.
    """

    id = models.BigAutoField(primary_key=True)

    class Meta:
        abstract = True
