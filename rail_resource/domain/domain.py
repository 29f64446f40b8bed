"""
Domain batch operations: create, update, upsert, delete and undelete.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from django.core.exceptions import ValidationError
from django.utils.translation import gettext as _

from ..exceptions import UnexpectedTypeError
from ..models import SoftDeletableModel
from ..resource import Resource
from ..resource_list import ResourceList
from ..resource_util import convert_objects_to_resource_list
from ..status import ResourceStatus
from ..violations import ConstraintViolation
from .base import BaseDomain

logger = logging.getLogger(__name__)


class Domain(BaseDomain):
    """
    Batch operations on the objects of one model.

    Every batch method accepts model instances, bound model forms, wrappers
    or already built resources, and returns a ``ResourceList``.

    With ``auto_commit=False`` (default) the whole batch is written in one
    transaction: the first failure rolls back everything and every resource
    that did not fail is canceled. With ``auto_commit=True`` each resource is
    committed on its own, in input order, and a failure only affects it.
    """

    def create(self, resource: Any) -> Resource:
        return self.creates([resource]).get(0)

    def creates(self, resources: Iterable[Any], auto_commit: bool = False) -> ResourceList:
        resource_list = convert_objects_to_resource_list(resources, self.model)
        return self._persist_list("create", resource_list, self._create, auto_commit)

    def update(self, resource: Any) -> Resource:
        return self.updates([resource]).get(0)

    def updates(self, resources: Iterable[Any], auto_commit: bool = False) -> ResourceList:
        resource_list = convert_objects_to_resource_list(resources, self.model)
        return self._persist_list("update", resource_list, self._update, auto_commit)

    def upsert(self, resource: Any) -> Resource:
        return self.upserts([resource]).get(0)

    def upserts(self, resources: Iterable[Any], auto_commit: bool = False) -> ResourceList:
        resource_list = convert_objects_to_resource_list(resources, self.model)
        return self._persist_list("upsert", resource_list, self._upsert, auto_commit)

    def delete(self, resource: Any, soft: bool = True) -> Resource:
        return self.deletes([resource], soft=soft).get(0)

    def deletes(
        self, resources: Iterable[Any], soft: bool = True, auto_commit: bool = False
    ) -> ResourceList:
        resource_list = convert_objects_to_resource_list(
            resources, self.model, allow_form=False
        )

        def persist(resource: Resource) -> ResourceStatus:
            return self._delete(resource, soft)

        return self._persist_list(
            "delete", resource_list, persist, auto_commit, validate=False
        )

    def undelete(self, identifier: Any) -> Resource:
        return self.undeletes([identifier]).get(0)

    def undeletes(self, identifiers: Iterable[Any], auto_commit: bool = False) -> ResourceList:
        if not issubclass(self.model, SoftDeletableModel):
            raise UnexpectedTypeError(self.model, "SoftDeletableModel")

        resource_list = self._find_undelete_resources(list(identifiers))
        return self._persist_list(
            "undelete", resource_list, self._undelete, auto_commit, validate=False
        )

    def _save(self, resource: Resource, **kwargs) -> None:
        instance = resource.real_data
        form = resource.data if resource.is_form() else None
        if form is not None:
            form.save(commit=False)
        instance.save(using=self.using, **kwargs)
        if form is not None:
            form.save_m2m()

    def _create(self, resource: Resource) -> ResourceStatus:
        self._save(resource, force_insert=True)
        return ResourceStatus.CREATED

    def _update(self, resource: Resource) -> ResourceStatus:
        if resource.real_data.pk is None:
            raise ValidationError(_("The object does not exist"), code="does_not_exist")
        self._save(resource, force_update=True)
        return ResourceStatus.UPDATED

    def _upsert(self, resource: Resource) -> ResourceStatus:
        if resource.real_data._state.adding:
            return self._create(resource)
        return self._update(resource)

    def _delete(self, resource: Resource, soft: bool) -> ResourceStatus:
        instance = resource.real_data
        if instance.pk is None:
            raise ValidationError(_("The object does not exist"), code="does_not_exist")

        if soft and isinstance(instance, SoftDeletableModel) and not instance.is_deleted:
            instance.soft_delete()
            instance.save(using=self.using, update_fields=["deleted_at"])
        else:
            instance.delete(using=self.using)
        return ResourceStatus.DELETED

    def _undelete(self, resource: Resource) -> ResourceStatus:
        instance = resource.real_data
        instance.restore()
        instance.save(using=self.using, update_fields=["deleted_at"])
        return ResourceStatus.UNDELETED

    def _normalize_pk(self, identifier: Any) -> Any:
        if isinstance(identifier, self.model):
            return identifier.pk
        if identifier is None or isinstance(identifier, (bool, dict, list)):
            return None
        try:
            return self.model._meta.pk.to_python(identifier)
        except ValidationError:
            return None

    def _find_undelete_resources(self, identifiers: list) -> ResourceList:
        """Load the objects to undelete, soft deleted rows included."""
        pks = [self._normalize_pk(identifier) for identifier in identifiers]
        lookup = list(dict.fromkeys(pk for pk in pks if pk is not None))
        found = {}
        if lookup:
            manager = self.model._base_manager.db_manager(self.using)
            found = {obj.pk: obj for obj in manager.filter(pk__in=lookup)}

        resource_list = ResourceList()
        for identifier, pk in zip(identifiers, pks):
            obj = found.get(pk) if pk is not None else None
            if obj is not None:
                resource_list.add(Resource(obj))
                continue

            resource = Resource(self.new_instance())
            resource.errors.add(
                ConstraintViolation(
                    message=_('The object with the identifier "%(id)s" does not exist')
                    % {"id": identifier},
                    code="does_not_exist",
                    params={"id": identifier},
                )
            )
            resource.status = ResourceStatus.ERROR
            resource_list.add(resource)
            logger.info(
                "Cannot undelete %s %r: object does not exist", self.model_label, identifier
            )

        return resource_list
