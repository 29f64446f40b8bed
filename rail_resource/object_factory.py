"""
Factory of new domain objects.
"""

from typing import Any, Mapping, Optional

from .exceptions import InvalidArgumentError


class ObjectFactory:
    """Create model instances initialised with the field defaults."""

    def create(self, model: type, options: Optional[Mapping[str, Any]] = None) -> Any:
        try:
            return model(**dict(options or {}))
        except TypeError as exc:
            raise InvalidArgumentError(
                f"Cannot create a new instance of {model.__name__}: {exc}"
            ) from exc
