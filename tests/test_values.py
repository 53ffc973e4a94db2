"""Tests for reading field values off bound objects."""

from dataclasses import dataclass

from pydantic import BaseModel

from boundform.forms.errors import AttributeNotFound
from boundform.forms.fields import FieldSpec
from boundform.forms.records import Record
from boundform.forms.values import (
    AttributeReadable,
    current_value,
    read_attribute,
    resolve_value,
    stringify,
)


class Address(BaseModel):
    city: str = ""
    zip: str | None = None


class Person(Record):
    name: str = ""
    address: Address = Address()


@dataclass
class Plain:
    title: str


class Readable:
    """Only exposes attributes through get_attribute."""

    def __init__(self, **values):
        self._values = values

    def get_attribute(self, name):
        try:
            return self._values[name]
        except KeyError:
            raise AttributeNotFound(name) from None


class TestReadAttribute:
    def test_reads_single_segment(self):
        assert read_attribute(Person(name="Ada"), ["name"]) == "Ada"

    def test_reads_nested_path(self):
        person = Person(address=Address(city="Lisbon"))
        assert read_attribute(person, ["address", "city"]) == "Lisbon"

    def test_missing_attribute_is_none(self):
        assert read_attribute(Person(), ["nickname"]) is None

    def test_missing_nested_attribute_is_none(self):
        assert read_attribute(Person(), ["address", "country"]) is None

    def test_none_intermediate_is_none(self):
        assert read_attribute({"address": None}, ["address", "city"]) is None

    def test_reads_mapping_keys(self):
        assert read_attribute({"address": {"city": "Madrid"}}, "address.city") == "Madrid"

    def test_reads_plain_objects(self):
        assert read_attribute(Plain(title="Hello"), ["title"]) == "Hello"

    def test_uses_get_attribute_capability(self):
        readable = Readable(inner=Readable(value=42))
        assert isinstance(readable, AttributeReadable)
        assert read_attribute(readable, ["inner", "value"]) == 42

    def test_get_attribute_miss_is_none(self):
        assert read_attribute(Readable(), ["anything"]) is None

    def test_record_hides_private_names(self):
        assert read_attribute(Person(), ["_resource_owner"]) is None

    def test_does_not_mutate_bound_object(self):
        person = Person(name="Ada")
        before = person.model_dump()
        read_attribute(person, ["address", "city"])
        assert person.model_dump() == before


class TestResolveValue:
    def test_explicit_value_wins(self):
        spec = FieldSpec("name", value="Override")
        assert resolve_value(spec, Person(name="Ada")) == "Override"

    def test_reads_from_bound_object(self):
        assert resolve_value(FieldSpec("name"), Person(name="Ada")) == "Ada"

    def test_no_bound_object(self):
        assert resolve_value(FieldSpec("name")) is None

    def test_missing_attribute(self):
        assert resolve_value(FieldSpec("nickname"), Person()) is None

    def test_falsy_explicit_value_still_wins(self):
        assert current_value(["name"], Person(name="Ada"), explicit="") == ""


class TestStringify:
    def test_none_is_empty(self):
        assert stringify(None) == ""

    def test_numbers(self):
        assert stringify(5) == "5"
