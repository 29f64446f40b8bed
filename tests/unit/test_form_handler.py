"""
Tests for the form handler: decoding, limits, object resolution and binding.
"""

import json
from unittest.mock import Mock

import pytest
from django import forms
from django.test import RequestFactory

from rail_resource.converters import ConverterRegistry, JsonConverter
from rail_resource.domain import Domain
from rail_resource.exceptions import (
    ConverterNotFoundError,
    DecodeError,
    InvalidArgumentError,
    InvalidPayloadStructureError,
    PayloadTooLargeError,
    SizeMismatchError,
)
from rail_resource.forms import FormFactory
from rail_resource.handler import (
    DomainFormConfigList,
    FormConfig,
    FormHandler,
    ResourceLimits,
)
from test_app.forms import FooForm, PlainFooForm
from test_app.models import Foo

pytestmark = pytest.mark.unit


def build_request(payload, method="post"):
    body = payload if isinstance(payload, str) else json.dumps(payload)
    return getattr(RequestFactory(), method)(
        "/resources/", data=body, content_type="application/json"
    )


def build_handler(payload, limits=None, form_factory=None, method="post"):
    return FormHandler(
        build_request(payload, method),
        converter_registry=ConverterRegistry([JsonConverter()]),
        form_factory=form_factory,
        limits=limits or ResourceLimits(),
    )


def records(*names):
    return {"records": [{"name": name} for name in names]}


def test_request_is_required():
    with pytest.raises(InvalidArgumentError):
        FormHandler(None)


def test_default_collaborators():
    handler = FormHandler(build_request({}))

    assert handler.converter_registry.has("json")
    assert isinstance(handler.form_factory, FormFactory)
    assert handler.limits == ResourceLimits.from_settings()


class TestProcessForm:
    def test_single_form(self):
        handler = build_handler({"name": "foo", "description": "bar"})
        foo = Foo()

        form = handler.process_form(FormConfig(FooForm), foo)

        assert form.is_bound
        assert form.is_valid()
        assert form.instance is foo
        assert foo.name == "foo"
        assert foo.description == "bar"

    def test_single_form_with_errors_is_returned(self):
        handler = build_handler({"name": ""})

        form = handler.process_form(FormConfig(FooForm), Foo())

        assert not form.is_valid()
        assert "name" in form.errors

    def test_plain_model_form(self):
        handler = build_handler({"name": "foo"})
        form = handler.process_form(FormConfig(PlainFooForm), Foo())
        assert form.is_valid()

    def test_non_model_form_is_rejected(self):
        class SearchForm(forms.Form):
            query = forms.CharField()

        handler = build_handler({"query": "foo"})
        with pytest.raises(InvalidArgumentError):
            handler.process_form(FormConfig(SearchForm), Foo())


class TestDecoding:
    def test_invalid_json(self):
        handler = build_handler("{not json")
        with pytest.raises(DecodeError):
            handler.process_form(FormConfig(FooForm), Foo())

    def test_unknown_converter(self):
        handler = build_handler({"name": "foo"})
        with pytest.raises(ConverterNotFoundError):
            handler.process_form(FormConfig(FooForm, converter="xml"), Foo())

    def test_missing_records_field_is_relabelled(self):
        handler = build_handler({"rows": [{"name": "foo"}]})
        config = DomainFormConfigList(Domain(Foo), FooForm)

        with pytest.raises(InvalidPayloadStructureError) as exc_info:
            handler.process_forms(config)

        assert str(exc_info.value) == (
            'The list of records must be given in the "records" field'
        )
        assert exc_info.value.code == "INVALID_PAYLOAD_STRUCTURE"

    def test_records_must_be_objects(self):
        handler = build_handler({"records": ["foo", "bar"]})
        config = DomainFormConfigList(Domain(Foo), FooForm)

        with pytest.raises(InvalidPayloadStructureError):
            handler.process_forms(config)


class TestLimits:
    def test_effective_limit_is_capped(self):
        handler = build_handler({}, limits=ResourceLimits(default_limit=10, max_limit=5))
        assert handler.default_limit == 10
        assert handler.max_limit == 5
        assert handler.get_limit(8) == 5

    def test_payload_too_large(self):
        factory = Mock(wraps=FormFactory())
        handler = build_handler(
            records("a", "b", "c", "d", "e", "f"),
            limits=ResourceLimits(default_limit=10, max_limit=5),
            form_factory=factory,
        )
        config = DomainFormConfigList(Domain(Foo), FooForm).set_limit(8)

        with pytest.raises(PayloadTooLargeError) as exc_info:
            handler.process_forms(config)

        assert exc_info.value.limit == 5
        assert "5" in str(exc_info.value)
        factory.create_form.assert_not_called()

    def test_payload_at_limit_is_accepted(self):
        handler = build_handler(
            records("a", "b", "c", "d", "e"),
            limits=ResourceLimits(default_limit=10, max_limit=5),
        )
        config = DomainFormConfigList(Domain(Foo), FooForm).set_limit(8)

        assert len(handler.process_forms(config)) == 5

    def test_single_config_uses_default_limit(self):
        handler = build_handler({"name": "foo"}, limits=ResourceLimits(default_limit=1))
        assert handler.process_form(FormConfig(FooForm), Foo()).is_valid()


class TestProcessForms:
    def test_size_mismatch(self):
        factory = Mock(wraps=FormFactory())
        handler = build_handler(records("a", "b", "c"), form_factory=factory)
        config = DomainFormConfigList(Domain(Foo), FooForm)

        with pytest.raises(SizeMismatchError) as exc_info:
            handler.process_forms(config, [Foo(), Foo()])

        assert exc_info.value.request_size == 3
        assert exc_info.value.object_size == 2
        assert "(3)" in str(exc_info.value)
        assert "(2)" in str(exc_info.value)
        factory.create_form.assert_not_called()

    def test_creation_forms_follow_record_order(self):
        handler = build_handler(records("a", "", "c"))
        config = DomainFormConfigList(Domain(Foo), FooForm)

        forms_ = handler.process_forms(config)

        assert [form.is_valid() for form in forms_] == [True, False, True]
        assert [form.instance.name for form in forms_] == ["a", "", "c"]
        assert all(form.instance.pk is None for form in forms_)
        assert forms_[0].validation_groups == ("Default", "Create")

    def test_supplied_objects_are_used(self):
        handler = build_handler(records("a", "b"))
        config = DomainFormConfigList(Domain(Foo), FooForm)
        objects = [Foo(), Foo()]

        forms_ = handler.process_forms(config, objects)

        assert [form.instance for form in forms_] == objects

    def test_empty_records(self):
        handler = build_handler({"records": []})
        config = DomainFormConfigList(Domain(Foo), FooForm)
        assert handler.process_forms(config) == []

    def test_builder_handlers_run_before_binding(self):
        def add_confirmation(form):
            form.fields["confirm"] = forms.BooleanField(required=True)

        handler = build_handler(
            {"records": [{"name": "a", "confirm": True}, {"name": "b"}]}
        )
        config = DomainFormConfigList(Domain(Foo), FooForm)
        config.add_builder_handler(add_confirmation)

        first, second = handler.process_forms(config)

        assert first.is_valid()
        assert "confirm" in second.errors

    @pytest.mark.django_db
    def test_update_mode_loads_objects_and_strips_identifier(self):
        foo = Foo.objects.create(name="one", description="kept")
        handler = build_handler({"records": [{"id": foo.pk, "name": "renamed"}]})
        config = DomainFormConfigList(Domain(Foo), FooForm).set_creation(False)

        (form,) = handler.process_forms(config)

        assert form.instance == foo
        assert "id" not in form.data
        assert form.validation_groups == ("Default", "Update")
        assert form.is_valid()
        assert form.instance.description == ""

    @pytest.mark.django_db
    def test_patch_keeps_missing_fields(self):
        foo = Foo.objects.create(name="one", description="kept", detail="x")
        handler = build_handler(
            {"records": [{"id": foo.pk, "name": "renamed"}]}, method="patch"
        )
        config = DomainFormConfigList(Domain(Foo), FooForm, method="PATCH")
        config.set_creation(False)

        (form,) = handler.process_forms(config)

        assert form.is_valid()
        assert form.instance.name == "renamed"
        assert form.instance.description == "kept"
        assert form.instance.detail == "x"

    @pytest.mark.django_db
    def test_update_group_hook_of_form(self):
        foo = Foo.objects.create(name="one")
        handler = build_handler({"records": [{"id": foo.pk, "name": "locked"}]})
        config = DomainFormConfigList(Domain(Foo), FooForm).set_creation(False)

        (form,) = handler.process_forms(config)

        assert not form.is_valid()
        assert form.non_field_errors() == ["Locked objects cannot be renamed."]

    def test_update_hook_is_not_run_on_creation(self):
        handler = build_handler(records("locked"))
        config = DomainFormConfigList(Domain(Foo), FooForm)

        (form,) = handler.process_forms(config)

        assert form.is_valid()
