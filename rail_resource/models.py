"""
Model mixins understood by the resource domain.
"""

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class SoftDeletableManager(models.Manager):
    """Manager hiding the soft deleted rows."""

    def get_queryset(self):
        return super().get_queryset().filter(deleted_at__isnull=True)


class SoftDeletableModel(models.Model):
    """Model whose rows can be marked as deleted instead of being removed."""

    deleted_at = models.DateTimeField(
        _("deleted at"), null=True, blank=True, editable=False, db_index=True
    )

    objects = SoftDeletableManager()
    all_objects = models.Manager()

    class Meta:
        abstract = True

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def soft_delete(self) -> None:
        self.deleted_at = timezone.now()

    def restore(self) -> None:
        self.deleted_at = None
