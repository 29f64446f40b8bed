"""
Wrappers for domain objects submitted to a domain without a form.
"""

from typing import Any, Iterable


class ResourceWrapper:
    """Carry a domain object together with processing hints."""

    def __init__(self, data: Any):
        self.data = data

    def get_data(self) -> Any:
        return self.data


class ValidationWrapper(ResourceWrapper):
    """Wrapper defining the validation groups used to validate the object."""

    def __init__(self, data: Any, validation_groups: Iterable[str] = ()):
        super().__init__(data)
        self.validation_groups = tuple(validation_groups)

    def get_validation_groups(self) -> tuple[str, ...]:
        return self.validation_groups
