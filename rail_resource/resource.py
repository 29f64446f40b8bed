"""
Resource: one unit of batch work.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from django.forms import BaseForm
from django.forms.utils import ErrorDict

from .exceptions import InvalidArgumentError
from .status import ResourceStatus
from .violations import ConstraintViolation, ConstraintViolationList
from .wrappers import ResourceWrapper


def get_real_data(data: Any) -> Any:
    """Return the domain object behind a form, a wrapper or a raw object."""
    if isinstance(data, BaseForm):
        return getattr(data, "instance", None)
    if isinstance(data, ResourceWrapper):
        return data.get_data()
    return data


class Resource:
    """
    Wrap a domain object, or the bound form holding it, with the outcome of
    its processing.

    The status starts as ``PENDING`` and is updated in place by the domain.
    ``errors`` holds the violations that are not attached to a form field.
    """

    def __init__(
        self,
        data: Any,
        errors: Optional[Iterable[ConstraintViolation]] = None,
    ):
        if data is None:
            raise InvalidArgumentError("The data of a resource must be an object")
        self._data = data
        self._real_data = get_real_data(data)
        self._status = ResourceStatus.PENDING
        self.errors = ConstraintViolationList(errors or ())

    def __repr__(self) -> str:
        return f"<Resource status={self._status.value!r} data={self._real_data!r}>"

    @property
    def status(self) -> ResourceStatus:
        return self._status

    @status.setter
    def status(self, value: str) -> None:
        self._status = ResourceStatus(value)

    @property
    def data(self) -> Any:
        return self._data

    @property
    def real_data(self) -> Any:
        return self._real_data

    def is_form(self) -> bool:
        return isinstance(self._data, BaseForm)

    @property
    def form_errors(self) -> ErrorDict:
        if not self.is_form():
            raise InvalidArgumentError("The data of resource is not a form instance")
        return self._data.errors

    def is_valid(self) -> bool:
        if self.is_form() and self._data.errors:
            return False
        return len(self.errors) == 0
