"""Tests for host value classification and conversion."""

from collections import namedtuple
from dataclasses import dataclass, field
from decimal import Decimal
from fractions import Fraction
from types import SimpleNamespace

import pytest

from stache import MISSING, Lookup, ValueKind, is_empty, kind_of
from stache.values import accepts_args, field_by_alias, record_names, to_str

Point = namedtuple("Point", "x y")


@dataclass
class User:
    name: str
    user_id: int = field(default=0, metadata={"json": "userId,omitempty"})
    secret: str = field(default="", metadata={"json": "-"})
    nick: str = field(default="", metadata={"alias": "handle"})


class Settings:
    model_fields = {"theme_name": SimpleNamespace(alias="themeName")}

    def __init__(self, theme_name):
        self.theme_name = theme_name


class Upper:
    def lookup(self, name):
        return name.upper()


class TestKindOf:
    """kind_of classification."""

    @pytest.mark.parametrize(
        ("value", "kind"),
        [
            (MISSING, ValueKind.MISSING),
            (None, ValueKind.NULL),
            (True, ValueKind.BOOLEAN),
            (3, ValueKind.INTEGER),
            (2.5, ValueKind.FLOAT),
            (Decimal("1.5"), ValueKind.FLOAT),
            (Fraction(1, 3), ValueKind.FLOAT),
            (1 + 2j, ValueKind.COMPLEX),
            ("s", ValueKind.STRING),
            (b"s", ValueKind.STRING),
            ([1], ValueKind.SEQUENCE),
            ((1, 2), ValueKind.SEQUENCE),
            (range(3), ValueKind.SEQUENCE),
            ({"a": 1}, ValueKind.MAPPING),
            (len, ValueKind.CALLABLE),
            (lambda: 0, ValueKind.CALLABLE),
            (Upper(), ValueKind.CUSTOM),
            (Point(1, 2), ValueKind.RECORD),
            (User("ada"), ValueKind.RECORD),
            (object(), ValueKind.RECORD),
        ],
    )
    def test_kinds(self, value, kind):
        assert kind_of(value) is kind

    def test_class_with_lookup_method_is_not_custom(self):
        assert kind_of(Upper) is ValueKind.RECORD

    def test_lookup_protocol(self):
        assert isinstance(Upper(), Lookup)


class TestIsEmpty:
    """Section truthiness."""

    @pytest.mark.parametrize(
        "value",
        [MISSING, None, False, 0, 0.0, Decimal(0), 0j, "", "  \n", [], (), range(0)],
    )
    def test_empty(self, value):
        assert is_empty(value)

    @pytest.mark.parametrize(
        "value",
        [True, 1, -1, 0.1, " x ", [0], {}, {"a": 1}, object(), User("ada"), len],
    )
    def test_not_empty(self, value):
        assert not is_empty(value)


class TestToStr:
    """Output stringification."""

    def test_none_and_missing(self):
        assert to_str(None) == ""
        assert to_str(MISSING) == ""

    def test_bytes_decoded(self):
        assert to_str(b"caf\xc3\xa9") == "café"

    def test_numbers(self):
        assert to_str(42) == "42"
        assert to_str(1.5) == "1.5"
        assert to_str(True) == "True"


class TestAcceptsArgs:
    """Arity checks for template callables."""

    def test_exact_arity(self):
        def two(a, b):
            return a

        assert accepts_args(two, 2)
        assert not accepts_args(two, 1)
        assert not accepts_args(two, 3)

    def test_defaults_and_varargs(self):
        def flexible(a, b=1, *rest):
            return a

        assert accepts_args(flexible, 1)
        assert accepts_args(flexible, 5)
        assert not accepts_args(flexible, 0)

    def test_bound_method_excludes_self(self):
        assert accepts_args(Upper().lookup, 1)
        assert not accepts_args(Upper().lookup, 2)


class TestFieldByAlias:
    """Alternate field names on records."""

    def test_json_tag(self):
        assert field_by_alias(User("ada", user_id=7), "userId") == 7

    def test_alias_metadata(self):
        assert field_by_alias(User("ada", nick="a"), "handle") == "a"

    def test_dash_tag_is_skipped(self):
        assert field_by_alias(User("ada", secret="x"), "-") is MISSING

    def test_model_fields_alias(self):
        assert field_by_alias(Settings("dark"), "themeName") == "dark"

    def test_no_match(self):
        assert field_by_alias(User("ada"), "email") is MISSING
        assert field_by_alias(object(), "email") is MISSING


class TestRecordNames:
    """Names offered for "did you mean" hints."""

    def test_mapping_string_keys(self):
        assert record_names({"a": 1, 2: "b"}) == frozenset({"a"})

    def test_dataclass_fields(self):
        assert record_names(User("ada")) == frozenset({"name", "user_id", "secret", "nick"})

    def test_namedtuple_fields(self):
        assert record_names(Point(1, 2)) == frozenset({"x", "y"})

    def test_plain_object_public_attrs(self):
        obj = SimpleNamespace(title="t", _hidden=1)
        assert record_names(obj) == frozenset({"title"})

    def test_other_kinds(self):
        assert record_names([1, 2]) == frozenset()
