"""
Base of the resource domain: model access and commit policies.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from django.core.exceptions import ValidationError
from django.db import DatabaseError, models, transaction

from ..forms import DEFAULT_GROUP, validate_instance
from ..object_factory import ObjectFactory
from ..observability import capture_exception
from ..resource import Resource
from ..resource_list import ResourceList
from ..signals import ACTION_SIGNALS
from ..status import ResourceStatus
from ..violations import ConstraintViolation, ConstraintViolationList
from ..wrappers import ValidationWrapper

logger = logging.getLogger(__name__)

Persister = Callable[[Resource], ResourceStatus]


def cancel_all_success_resources(resource_list: ResourceList) -> None:
    """Cancel every resource that has not failed."""
    for resource in resource_list:
        if resource.status != ResourceStatus.ERROR:
            resource.status = ResourceStatus.CANCELED


class BaseDomain:
    """
    Resource domain of one model.

    Args:
        model: The Django model managed by the domain
        object_factory: The factory of new instances
        using: The database alias, the default one when ``None``
    """

    def __init__(
        self,
        model: type[models.Model],
        object_factory: Optional[ObjectFactory] = None,
        using: Optional[str] = None,
    ):
        if not (isinstance(model, type) and issubclass(model, models.Model)):
            raise TypeError(f"{model!r} is not a Django model class")
        self.model = model
        self.object_factory = object_factory or ObjectFactory()
        self.using = using

    def __repr__(self) -> str:
        return f"<{type(self).__name__} model={self.model_label}>"

    @property
    def model_label(self) -> str:
        return self.model._meta.label

    @property
    def repository(self) -> models.Manager:
        return self.model._default_manager.db_manager(self.using)

    def new_instance(self, options: Optional[Mapping[str, Any]] = None) -> models.Model:
        return self.object_factory.create(self.model, options)

    def _get_validation_groups(self, resource: Resource) -> list[str]:
        if isinstance(resource.data, ValidationWrapper):
            return list(resource.data.get_validation_groups())
        instance = resource.real_data
        return [DEFAULT_GROUP, "Create" if instance.pk is None else "Update"]

    def _validate_resource(self, resource: Resource) -> bool:
        if not resource.is_form():
            try:
                validate_instance(resource.real_data, self._get_validation_groups(resource))
            except ValidationError as exc:
                resource.errors.add_all(ConstraintViolationList.from_validation_error(exc))
        return resource.is_valid()

    def _check_resource(self, resource: Resource, validate: bool) -> bool:
        """Run object validation when asked, the collected violations always count."""
        if validate:
            return self._validate_resource(resource)
        return resource.is_valid()

    def _persist_resource(
        self, action: str, resource: Resource, persist: Persister, validate: bool
    ) -> bool:
        """Persist one resource in its own atomic block."""
        if not self._check_resource(resource, validate):
            resource.status = ResourceStatus.ERROR
            return False

        try:
            with transaction.atomic(using=self.using):
                status = persist(resource)
        except ValidationError as exc:
            resource.errors.add_all(ConstraintViolationList.from_validation_error(exc))
            resource.status = ResourceStatus.ERROR
            return False
        except DatabaseError as exc:
            logger.info("Failed to %s %s: %s", action, self.model_label, exc)
            capture_exception(exc)
            resource.errors.add(
                ConstraintViolation(message=str(exc), code="database_error")
            )
            resource.status = ResourceStatus.ERROR
            return False

        resource.status = status
        return True

    def _persist_list(
        self,
        action: str,
        resource_list: ResourceList,
        persist: Persister,
        auto_commit: bool,
        validate: bool = True,
    ) -> ResourceList:
        pre_signal, post_signal = ACTION_SIGNALS[action]
        pre_signal.send(sender=self.model, domain=self, resources=resource_list)
        logger.debug(
            "Starting %s of %s %s resource(s) (auto_commit=%s)",
            action,
            len(resource_list),
            self.model_label,
            auto_commit,
        )

        if auto_commit:
            self._persist_auto_commit(action, resource_list, persist, validate)
        else:
            self._persist_transaction(action, resource_list, persist, validate)

        post_signal.send(sender=self.model, domain=self, resources=resource_list)
        logger.debug(
            "Finished %s of %s resource(s) with status %s",
            action,
            self.model_label,
            resource_list.status.value,
        )
        return resource_list

    def _persist_auto_commit(
        self, action: str, resource_list: ResourceList, persist: Persister, validate: bool
    ) -> None:
        for resource in resource_list:
            if resource.status == ResourceStatus.ERROR:
                continue
            self._persist_resource(action, resource, persist, validate)

    def _persist_transaction(
        self, action: str, resource_list: ResourceList, persist: Persister, validate: bool
    ) -> None:
        has_error = False

        with transaction.atomic(using=self.using):
            for resource in resource_list:
                if resource.status == ResourceStatus.ERROR:
                    has_error = True
                elif has_error:
                    # Nothing is written after a failure, remaining items are
                    # only validated to report their errors.
                    if not self._check_resource(resource, validate):
                        resource.status = ResourceStatus.ERROR
                elif not self._persist_resource(action, resource, persist, validate):
                    has_error = True

            if has_error:
                transaction.set_rollback(True, using=self.using)

        if has_error:
            logger.info(
                "Rolled back %s of %s resource(s)", action, self.model_label
            )
            cancel_all_success_resources(resource_list)
