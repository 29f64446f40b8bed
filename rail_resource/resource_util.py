"""
Helpers resolving submitted items into resources.
"""

from __future__ import annotations

from typing import Any, Iterable

from django.forms import BaseForm

from .exceptions import UnexpectedTypeError
from .resource import Resource, get_real_data
from .resource_list import ResourceList


def _type_name(model_class: type) -> str:
    return f"{model_class.__module__}.{model_class.__qualname__}"


def validate_object_resource(
    obj: Any, model_class: type, position: int = 0, allow_form: bool = True
) -> None:
    """
    Check that the submitted item holds an instance of ``model_class``.

    Raises:
        UnexpectedTypeError: When a form is given but forms are not allowed,
            or when the underlying object has another type.
    """
    if isinstance(obj, Resource):
        obj = obj.data

    if isinstance(obj, BaseForm):
        if not allow_form:
            raise UnexpectedTypeError(obj, _type_name(model_class), position)
        obj = obj.instance

    real = get_real_data(obj)
    if not isinstance(real, model_class):
        raise UnexpectedTypeError(real, _type_name(model_class), position)


def convert_objects_to_resource_list(
    objects: Iterable[Any], model_class: type, allow_form: bool = True
) -> ResourceList:
    """Resolve each submitted item into a resource of a new list."""
    resource_list = ResourceList()

    for position, obj in enumerate(objects):
        validate_object_resource(obj, model_class, position, allow_form)
        resource_list.add(obj if isinstance(obj, Resource) else Resource(obj))

    return resource_list
