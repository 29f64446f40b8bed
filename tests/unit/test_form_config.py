"""
Tests for form configs and batched object resolution.
"""

from unittest.mock import Mock

import pytest

from rail_resource.domain import Domain
from rail_resource.exceptions import InvalidPayloadStructureError
from rail_resource.handler import DomainFormConfigList, FormConfig, FormConfigList
from test_app.forms import BarForm, FooForm
from test_app.models import Bar, Foo

pytestmark = pytest.mark.unit


@pytest.fixture
def config():
    return DomainFormConfigList(Domain(Foo), FooForm)


class TestFormConfig:
    def test_clear_missing_depends_on_method(self):
        assert FormConfig(FooForm).submit_clear_missing is True
        assert FormConfig(FooForm, method="patch").submit_clear_missing is False

    def test_clear_missing_can_be_forced(self):
        config = FormConfig(FooForm, method="PATCH").set_submit_clear_missing(True)
        assert config.submit_clear_missing is True

    def test_get_options_returns_a_copy(self):
        config = FormConfig(FooForm, {"prefix": "foo"})
        options = config.get_options()
        options["prefix"] = "bar"

        assert config.get_options() == {"prefix": "foo"}

    def test_builder_handlers(self):
        handler = Mock()
        config = FormConfig(FooForm).add_builder_handler(handler)
        assert config.builder_handlers == [handler]


class TestFindList:
    def test_records_are_required(self):
        with pytest.raises(InvalidPayloadStructureError):
            FormConfigList(FooForm).find_list({"rows": []})

    def test_list_payload_has_no_records(self):
        with pytest.raises(InvalidPayloadStructureError):
            FormConfigList(FooForm).find_list([{"name": "foo"}])

    def test_records_must_be_a_list(self):
        with pytest.raises(InvalidPayloadStructureError):
            FormConfigList(FooForm).find_list({"records": {"name": "foo"}})

    def test_returns_records(self):
        config = FormConfigList(FooForm)
        records = config.find_list({"records": [{"name": "foo"}]})

        assert records == [{"name": "foo"}]
        assert config.transactional is True

    def test_transaction_key_overrides_transactional(self):
        config = FormConfigList(FooForm)
        config.find_list({"records": [], "transaction": False})
        assert config.transactional is False

        config.find_list({"records": [], "transaction": True})
        assert config.transactional is True

    def test_limit_setter(self):
        assert FormConfigList(FooForm).set_limit(8).limit == 8


class TestDomainFormConfigListOptions:
    def test_create_groups_for_new_object(self, config):
        options = config.get_options(Foo())
        assert options["validation_groups"] == ["Default", "Create"]

    def test_update_groups_for_existing_object(self, config):
        options = config.get_options(Foo(pk=4))
        assert options["validation_groups"] == ["Default", "Update"]

    def test_configured_groups_are_kept_and_deduplicated(self):
        config = DomainFormConfigList(
            Domain(Foo), FooForm, {"validation_groups": ["Strict", "Default"]}
        )
        options = config.get_options(Foo())
        assert options["validation_groups"] == ["Strict", "Default", "Create"]

    def test_non_model_object_keeps_options(self, config):
        assert config.get_options(object()) == {}
        assert config.get_options() == {}


class TestDomainFormConfigListObjects:
    def test_creation_mode_builds_new_objects(self, config):
        config.set_default_value_options({"detail": "imported"})
        records = [{"id": 1, "name": "a"}, {"name": "b"}]

        converted_records, objects = config.convert_objects(records)

        assert converted_records == records
        assert len(objects) == 2
        assert all(obj.pk is None and obj.detail == "imported" for obj in objects)
        assert objects[0] is not objects[1]

    def test_extract_identifiers_does_not_mutate_records(self, config):
        records = [{"id": 3, "name": "a"}, {"name": "b"}]

        stripped, identifiers = config.extract_identifiers(records)

        assert stripped == [{"name": "a"}, {"name": "b"}]
        assert identifiers == [3, None]
        assert records[0] == {"id": 3, "name": "a"}

    def test_custom_identifier(self, config):
        config.set_identifier("name")
        stripped, identifiers = config.extract_identifiers([{"name": "a", "detail": "x"}])

        assert stripped == [{"detail": "x"}]
        assert identifiers == ["a"]

    @pytest.mark.django_db
    def test_find_objects_keeps_order_and_duplicates(self, config, django_assert_num_queries):
        foo1 = Foo.objects.create(pk=1, name="one")
        foo3 = Foo.objects.create(pk=3, name="three")

        with django_assert_num_queries(1):
            objects = config.find_objects([3, 1, 3, 9])

        assert objects[0] == foo3
        assert objects[1] == foo1
        assert objects[2] is objects[0]
        assert objects[3].pk is None
        assert objects[3]._state.adding

    @pytest.mark.django_db
    def test_convert_objects_in_update_mode(self, config):
        foo = Foo.objects.create(name="one")
        config.set_creation(False)

        records, objects = config.convert_objects(
            [{"id": str(foo.pk), "name": "renamed"}, {"id": "not-a-number", "name": "new"}]
        )

        assert records == [{"name": "renamed"}, {"name": "new"}]
        assert objects[0] == foo
        assert objects[1].pk is None

    def test_find_objects_without_identifiers_does_not_query(self, config):
        objects = config.find_objects([None, None])
        assert [obj.pk for obj in objects] == [None, None]

    def test_identifier_defaults_to_setting(self, settings):
        settings.RAIL_RESOURCE = {"identifier": "name"}

        config = DomainFormConfigList(Domain(Foo), FooForm)

        assert config.identifier == "name"

    @pytest.mark.django_db
    def test_boolean_identifiers_are_ignored(self, config):
        Foo.objects.create(pk=1, name="one")

        objects = config.find_objects([True, False])

        assert [obj.pk for obj in objects] == [None, None]

    @pytest.mark.django_db
    def test_foreign_key_identifier(self):
        owner = Foo.objects.create(name="owner")
        bar = Bar.objects.create(title="bar", owner=owner)
        config = DomainFormConfigList(Domain(Bar), BarForm).set_identifier("owner")

        objects = config.find_objects([str(owner.pk), owner.pk + 100])

        assert objects[0] == bar
        assert objects[1].pk is None
