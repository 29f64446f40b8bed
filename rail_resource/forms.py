"""
Form helpers used to bind submitted records to domain objects.

Validation groups select extra validation hooks: for every group other than
``Default``, a ``validate_<group>_group()`` method defined on the form or on
the model instance is called after the regular cleaning.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from django import forms
from django.core.exceptions import ValidationError
from django.forms.models import BaseModelForm
from django.utils.datastructures import MultiValueDict

from .exceptions import InvalidArgumentError

DEFAULT_GROUP = "Default"


def run_validation_groups(obj: Any, groups: Iterable[str]) -> None:
    """
    Call the group hooks of ``obj``.

    Raises:
        ValidationError: Errors of all hooks, merged.
    """
    errors: dict[str, list] = {}
    for group in groups:
        if group == DEFAULT_GROUP:
            continue
        hook = getattr(obj, f"validate_{group.lower()}_group", None)
        if not callable(hook):
            continue
        try:
            hook()
        except ValidationError as exc:
            errors = exc.update_error_dict(errors)
    if errors:
        raise ValidationError(errors)


def validate_instance(instance: Any, groups: Iterable[str] = ()) -> None:
    """Validate a model instance and run its group hooks."""
    instance.full_clean()
    run_validation_groups(instance, groups)


class ValidationGroupsMixin:
    """Model form accepting the ``validation_groups`` option."""

    def __init__(self, *args, validation_groups: Optional[Iterable[str]] = None, **kwargs):
        self.validation_groups = tuple(validation_groups or ())
        super().__init__(*args, **kwargs)

    def _post_clean(self):
        super()._post_clean()
        for target in (self, self.instance):
            try:
                run_validation_groups(target, self.validation_groups)
            except ValidationError as exc:
                self._add_group_error(exc)

    def _add_group_error(self, error: ValidationError) -> None:
        for field, errors in error.update_error_dict({}).items():
            self.add_error(field if field in self.fields else None, errors)


class ResourceModelForm(ValidationGroupsMixin, forms.ModelForm):
    pass


class FormFactory:
    """Create the form bound to a domain object."""

    def create_form(
        self, form_class: type, instance: Any, options: Optional[Mapping[str, Any]] = None
    ) -> BaseModelForm:
        if not (isinstance(form_class, type) and issubclass(form_class, BaseModelForm)):
            raise InvalidArgumentError(
                f'The form type "{form_class!r}" must be a subclass of ModelForm'
            )
        options = dict(options or {})
        if not issubclass(form_class, ValidationGroupsMixin):
            options.pop("validation_groups", None)
        return form_class(instance=instance, **options)


def submit_form(form: forms.BaseForm, data: Mapping[str, Any], clear_missing: bool = True):
    """
    Bind ``data`` to an already created form.

    When ``clear_missing`` is false, the fields absent from ``data`` keep the
    current value of the object instead of being emptied.
    """
    payload = {form.add_prefix(name): value for name, value in data.items()}

    if not clear_missing:
        for name, field in form.fields.items():
            key = form.add_prefix(name)
            if key not in payload:
                payload[key] = field.prepare_value(form.get_initial_for_field(field, name))

    form.is_bound = True
    form.data = payload
    form.files = MultiValueDict()
    form._errors = None
    return form
