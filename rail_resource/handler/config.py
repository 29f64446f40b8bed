"""
Form configs describing how submitted records are bound to objects.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from django.utils.translation import gettext as _

from ..exceptions import InvalidPayloadStructureError

RECORDS_KEY = "records"
TRANSACTION_KEY = "transaction"

BuilderHandler = Callable[[Any], None]


class FormConfig:
    """
    Config of the form used for one submitted record.

    Args:
        form_class: The ModelForm class bound to each object
        options: Keyword arguments given to the form constructor
        method: The request method, ``PATCH`` keeps the missing fields
        converter: Name of the converter decoding the request content
    """

    def __init__(
        self,
        form_class: type,
        options: Optional[Mapping[str, Any]] = None,
        method: str = "POST",
        converter: str = "json",
    ):
        self.form_class = form_class
        self.options: dict[str, Any] = dict(options or {})
        self.method = method.upper()
        self.converter = converter
        self.builder_handlers: list[BuilderHandler] = []
        self._submit_clear_missing: Optional[bool] = None

    def set_options(self, options: Mapping[str, Any]) -> "FormConfig":
        self.options = dict(options)
        return self

    def get_options(self, obj: Any = None) -> dict[str, Any]:
        return dict(self.options)

    def add_builder_handler(self, handler: BuilderHandler) -> "FormConfig":
        self.builder_handlers.append(handler)
        return self

    def set_submit_clear_missing(self, clear_missing: Optional[bool]) -> "FormConfig":
        self._submit_clear_missing = clear_missing
        return self

    @property
    def submit_clear_missing(self) -> bool:
        if self._submit_clear_missing is None:
            return self.method != "PATCH"
        return self._submit_clear_missing


class FormConfigList(FormConfig):
    """Config of the forms used for a batch of records."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.limit: Optional[int] = None
        self.transactional = True

    def set_limit(self, limit: Optional[int]) -> "FormConfigList":
        self.limit = limit
        return self

    def set_transactional(self, transactional: bool) -> "FormConfigList":
        self.transactional = bool(transactional)
        return self

    def find_list(self, payload: Any) -> list:
        """
        Extract the records of a batch payload.

        A ``transaction`` key in the payload overrides the transactional mode.
        """
        if not isinstance(payload, Mapping) or RECORDS_KEY not in payload:
            raise InvalidPayloadStructureError(_('The "records" field is required'))

        if TRANSACTION_KEY in payload:
            self.set_transactional(payload[TRANSACTION_KEY])

        records = payload[RECORDS_KEY]
        if not isinstance(records, list):
            raise InvalidPayloadStructureError(_('The "records" field must be a list'))
        return records

    def convert_objects(self, records: list) -> tuple[list, list]:
        """Return the records to bind and the objects they are bound to."""
        raise NotImplementedError
