"""
Converters decoding the raw request content into records.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Optional, Union

from django.utils.module_loading import import_string
from django.utils.translation import gettext as _

from .config import get_resource_settings
from .exceptions import ConverterNotFoundError, DecodeError

logger = logging.getLogger(__name__)


class BaseConverter:
    """Decode raw request content into a mapping or a list."""

    name: str = ""

    def convert(self, content: Union[bytes, str]) -> Any:
        raise NotImplementedError


class JsonConverter(BaseConverter):
    name = "json"

    def convert(self, content: Union[bytes, str]) -> Union[dict, list]:
        try:
            if isinstance(content, bytes):
                content = content.decode("utf-8")
            data = json.loads(content)
        except (UnicodeDecodeError, ValueError) as exc:
            raise DecodeError(_("Request body should be a valid JSON")) from exc

        if not isinstance(data, (dict, list)):
            raise DecodeError(_("Request body should be a JSON object or array"))

        return data


class ConverterRegistry:
    """Converters available to the form handler, indexed by name."""

    def __init__(self, converters: Optional[Iterable[BaseConverter]] = None):
        self._converters: dict[str, BaseConverter] = {}
        for converter in converters or ():
            self.register(converter)

    def register(self, converter: BaseConverter) -> None:
        if not converter.name:
            raise ValueError(f"{type(converter).__name__} must define a name")
        self._converters[converter.name] = converter

    def has(self, name: str) -> bool:
        return name in self._converters

    def get(self, name: str) -> BaseConverter:
        try:
            return self._converters[name]
        except KeyError:
            raise ConverterNotFoundError(name) from None


def get_converter_registry() -> ConverterRegistry:
    """Build a registry with the converters declared in settings."""
    converters = []
    for path in get_resource_settings().converters:
        converter_class = import_string(path)
        converters.append(converter_class())
        logger.debug("Registered payload converter %s", path)
    return ConverterRegistry(converters)
