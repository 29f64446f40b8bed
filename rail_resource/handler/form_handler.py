"""
Form handler binding the records of the request to domain objects.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from django.forms.models import BaseModelForm
from django.utils.translation import gettext as _

from ..config import get_resource_settings
from ..converters import ConverterRegistry, get_converter_registry
from ..exceptions import (
    InvalidArgumentError,
    InvalidPayloadStructureError,
    PayloadTooLargeError,
    SizeMismatchError,
)
from ..forms import FormFactory, submit_form
from .config import FormConfig, FormConfigList

logger = logging.getLogger(__name__)


def _validate_limit(limit: Optional[int]) -> Optional[int]:
    """Return ``None`` for unlimited rows or an integer of at least 1."""
    return None if limit is None else max(1, int(limit))


@dataclass(frozen=True)
class ResourceLimits:
    """Row limits of the form handler, fixed at construction."""

    default_limit: Optional[int] = None
    max_limit: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "default_limit", _validate_limit(self.default_limit))
        max_limit = _validate_limit(self.max_limit)
        object.__setattr__(
            self, "max_limit", max_limit if max_limit is not None else self.default_limit
        )

    @classmethod
    def from_settings(cls) -> "ResourceLimits":
        settings = get_resource_settings()
        return cls(default_limit=settings.default_limit, max_limit=settings.max_limit)

    def resolve(self, limit: Optional[int] = None) -> Optional[int]:
        limit = limit if limit is not None else self.default_limit
        if limit is not None and self.max_limit is not None:
            limit = min(self.max_limit, limit)
        return _validate_limit(limit)


class FormHandler:
    """
    Decode the request content and bind each record to its object.

    Args:
        request: The current request, its body holds the payload
        converter_registry: The registry of the payload converters
        form_factory: The factory creating the forms
        limits: The row limits, read from settings by default
    """

    def __init__(
        self,
        request: Any,
        converter_registry: Optional[ConverterRegistry] = None,
        form_factory: Optional[FormFactory] = None,
        limits: Optional[ResourceLimits] = None,
    ):
        if request is None:
            raise InvalidArgumentError("The current request is required")
        self.request = request
        self.converter_registry = converter_registry or get_converter_registry()
        self.form_factory = form_factory or FormFactory()
        self.limits = limits or ResourceLimits.from_settings()

    @property
    def default_limit(self) -> Optional[int]:
        return self.limits.default_limit

    @property
    def max_limit(self) -> Optional[int]:
        return self.limits.max_limit

    def process_form(self, config: FormConfig, obj: Any) -> BaseModelForm:
        return self._process(config, [obj])[0]

    def process_forms(
        self, config: FormConfigList, objects: Optional[Sequence[Any]] = None
    ) -> list[BaseModelForm]:
        return self._process(config, list(objects or []))

    def get_limit(self, limit: Optional[int] = None) -> Optional[int]:
        return self.limits.resolve(limit)

    def get_data_list(self, config: FormConfig) -> list:
        converter = self.converter_registry.get(config.converter)
        data = converter.convert(self.request.body)

        if isinstance(config, FormConfigList):
            try:
                return config.find_list(data)
            except InvalidPayloadStructureError as exc:
                raise InvalidPayloadStructureError(
                    _('The list of records must be given in the "records" field')
                ) from exc

        return [data]

    def get_data_list_objects(self, config: FormConfig, objects: list) -> tuple[list, list]:
        is_list = isinstance(config, FormConfigList)
        limit = self.get_limit(config.limit if is_list else None)
        data_list = self.get_data_list(config)

        if limit is not None and len(data_list) > limit:
            raise PayloadTooLargeError(
                _("The list of records exceeds the allowed limit of %(limit)s rows")
                % {"limit": limit},
                limit=limit,
            )

        for record in data_list:
            if not isinstance(record, Mapping):
                raise InvalidPayloadStructureError(_("Each record must be an object"))

        if is_list and not objects:
            data_list, objects = config.convert_objects(data_list)

        return list(data_list), list(objects)

    def _process(self, config: FormConfig, objects: list) -> list[BaseModelForm]:
        data_list, objects = self.get_data_list_objects(config, objects)

        if len(objects) != len(data_list):
            raise SizeMismatchError(
                _(
                    "The size of the request data list (%(request_size)s) is different "
                    "from the object instance list (%(object_size)s)"
                )
                % {"request_size": len(data_list), "object_size": len(objects)},
                request_size=len(data_list),
                object_size=len(objects),
            )

        logger.debug(
            "Binding %s record(s) with %s", len(data_list), config.form_class.__name__
        )
        forms = []
        for record, obj in zip(data_list, objects):
            form = self.form_factory.create_form(
                config.form_class, obj, config.get_options(obj)
            )
            for handler in config.builder_handlers:
                handler(form)
            submit_form(form, record, config.submit_clear_missing)
            forms.append(form)

        return forms
