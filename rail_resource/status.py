"""
Statuses of resources and resource lists.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class ResourceStatus(models.TextChoices):
    PENDING = "pending", _("Pending")
    CANCELED = "canceled", _("Canceled")
    ERROR = "error", _("Error")
    CREATED = "created", _("Created")
    UPDATED = "updated", _("Updated")
    DELETED = "deleted", _("Deleted")
    UNDELETED = "undeleted", _("Undeleted")

    def is_success(self) -> bool:
        """Every status that is not pending, canceled or error is a success."""
        return self not in (
            ResourceStatus.PENDING,
            ResourceStatus.CANCELED,
            ResourceStatus.ERROR,
        )


class ResourceListStatus(models.TextChoices):
    PENDING = "pending", _("Pending")
    CANCEL = "cancel", _("Cancel")
    ERROR = "error", _("Error")
    SUCCESSFULLY = "successfully", _("Successfully")
    MIXED = "mixed", _("Mixed")
