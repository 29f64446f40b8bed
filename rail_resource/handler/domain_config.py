"""
Form config list resolving the objects of a batch through a domain.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping, Optional

from django.core.exceptions import ValidationError
from django.db import models

from ..config import get_resource_settings
from ..forms import DEFAULT_GROUP
from .config import FormConfigList

if TYPE_CHECKING:
    from ..domain import Domain


class DomainFormConfigList(FormConfigList):
    """
    In creation mode every record gets a new object. Otherwise the
    identifier of each record selects an existing object, or a new one when
    nothing matches.
    """

    def __init__(
        self,
        domain: "Domain",
        form_class: type,
        options: Optional[Mapping[str, Any]] = None,
        method: str = "POST",
        converter: str = "json",
    ):
        super().__init__(form_class, options, method, converter)
        self.domain = domain
        self.identifier = get_resource_settings().identifier
        self.default_value_options: dict[str, Any] = {}
        self.creation = True

    def set_identifier(self, identifier: str) -> "DomainFormConfigList":
        self.identifier = identifier
        return self

    def set_default_value_options(self, options: Mapping[str, Any]) -> "DomainFormConfigList":
        self.default_value_options = dict(options)
        return self

    def set_creation(self, creation: bool) -> "DomainFormConfigList":
        self.creation = creation
        return self

    def get_options(self, obj: Any = None) -> dict[str, Any]:
        options = super().get_options(obj)

        if isinstance(obj, models.Model):
            groups = list(options.get("validation_groups") or [])
            groups.append(DEFAULT_GROUP)
            groups.append("Create" if obj.pk is None else "Update")
            options["validation_groups"] = list(dict.fromkeys(groups))

        return options

    def extract_identifiers(self, records: list) -> tuple[list, list]:
        """Split the records into records without identifier and identifiers."""
        stripped = []
        identifiers = []

        for record in records:
            record = dict(record)
            identifiers.append(record.pop(self.identifier, None))
            stripped.append(record)

        return stripped, identifiers

    def convert_objects(self, records: list) -> tuple[list, list]:
        if self.creation:
            objects = [
                self.domain.new_instance(self.default_value_options) for _ in records
            ]
            return records, objects

        records, identifiers = self.extract_identifiers(records)
        return records, self.find_objects(identifiers)

    def _get_identifier_field(self) -> models.Field:
        meta = self.domain.model._meta
        return meta.pk if self.identifier == "pk" else meta.get_field(self.identifier)

    def _normalize_identifier(self, identifier: Any) -> Any:
        if identifier is None or isinstance(identifier, (bool, dict, list)):
            return None
        field = self._get_identifier_field()
        try:
            return field.to_python(identifier)
        except ValidationError:
            return None

    def find_objects(self, identifiers: list) -> list:
        """
        Load the objects of the identifiers with a single query.

        The result follows the order of ``identifiers``, duplicates included.
        Unknown identifiers get a new object.
        """
        normalized = [self._normalize_identifier(i) for i in identifiers]
        lookup_ids = list(dict.fromkeys(i for i in normalized if i is not None))
        found = {}
        if lookup_ids:
            attname = self._get_identifier_field().attname
            queryset = self.domain.repository.filter(
                **{f"{self.identifier}__in": lookup_ids}
            )
            for obj in queryset:
                found[getattr(obj, attname)] = obj

        objects = []
        for identifier in normalized:
            obj = found.get(identifier) if identifier is not None else None
            objects.append(
                obj if obj is not None
                else self.domain.new_instance(self.default_value_options)
            )
        return objects
