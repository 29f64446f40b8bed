"""
Constraint violations attached to resources and resource lists.
"""

from __future__ import annotations

from dataclasses import dataclass, field as dataclass_field
from typing import Any, Iterable, Optional

from django.core.exceptions import NON_FIELD_ERRORS, ValidationError


@dataclass
class ConstraintViolation:
    message: str
    code: Optional[str] = None
    field: Optional[str] = None
    params: dict[str, Any] = dataclass_field(default_factory=dict)

    def __str__(self) -> str:
        if self.field:
            return f"{self.field}: {self.message}"
        return self.message


def _render_message(error: ValidationError) -> str:
    message = error.message
    if error.params:
        message = message % error.params
    return str(message)


class ConstraintViolationList(list):
    """Ordered list of :class:`ConstraintViolation`."""

    def __init__(self, violations: Iterable[ConstraintViolation] = ()):
        super().__init__(violations)

    def add(self, violation: ConstraintViolation) -> None:
        self.append(violation)

    def add_all(self, violations: Iterable[ConstraintViolation]) -> None:
        self.extend(violations)

    def messages(self) -> list[str]:
        return [violation.message for violation in self]

    @classmethod
    def from_validation_error(cls, error: ValidationError) -> "ConstraintViolationList":
        """Flatten a Django ``ValidationError`` into violations."""
        violations = cls()
        if hasattr(error, "error_dict"):
            for field_name, errors in error.error_dict.items():
                for item in errors:
                    violations.add(
                        ConstraintViolation(
                            message=_render_message(item),
                            code=item.code,
                            field=None if field_name == NON_FIELD_ERRORS else field_name,
                            params=dict(item.params or {}),
                        )
                    )
        else:
            for item in error.error_list:
                violations.add(
                    ConstraintViolation(
                        message=_render_message(item),
                        code=item.code,
                        params=dict(item.params or {}),
                    )
                )
        return violations
