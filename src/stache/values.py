"""Value model: how the engine sees host data.

Templates render arbitrary Python data. Rather than converting it up
front, the engine classifies each value on demand into a ``ValueKind`` and
dispatches on that:

    ========  =====================================================
    MISSING   the ``MISSING`` sentinel (lookup found nothing)
    NULL      ``None``
    BOOLEAN   ``bool``
    INTEGER   ``int``
    FLOAT     ``float`` and other real numbers (Decimal, Fraction)
    COMPLEX   ``complex``
    STRING    ``str``, ``bytes``, ``bytearray``
    SEQUENCE  lists, tuples, ranges, any ``collections.abc.Sequence``
    MAPPING   dicts, any ``collections.abc.Mapping``
    CALLABLE  functions, bound methods, callable instances
    CUSTOM    objects implementing the ``Lookup`` protocol
    RECORD    dataclasses, namedtuples, any other object
    ========  =====================================================

The engine never mutates a value it is given.

Thread-Safety:
    All functions are stateless.

"""

from __future__ import annotations

import dataclasses
import inspect
import numbers
from collections.abc import Callable, Mapping, Sequence
from enum import Enum
from typing import Any, Protocol, runtime_checkable


class ValueKind(Enum):
    MISSING = "missing"
    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    COMPLEX = "complex"
    STRING = "string"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    CALLABLE = "callable"
    CUSTOM = "custom"
    RECORD = "record"


class _Missing:
    """Sentinel for a name that resolved to nothing."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


@runtime_checkable
class Lookup(Protocol):
    """Opt-in name resolution.

    A context value implementing ``lookup`` handles every name resolved
    against it; attribute and key access are skipped for that value.
    Raising ``MissingVariableError`` lets the engine apply its
    missing-variable policy.

    Example:
        >>> class Env:
        ...     def lookup(self, name):
        ...         return os.environ[name.upper()]
    """

    def lookup(self, name: str) -> Any: ...


def has_custom_lookup(value: object) -> bool:
    """Whether ``value`` implements ``Lookup`` (classes themselves do not count)."""
    if isinstance(value, type):
        return False
    return callable(getattr(value, "lookup", None))


def is_namedtuple(value: object) -> bool:
    return isinstance(value, tuple) and hasattr(type(value), "_fields")


def kind_of(value: object) -> ValueKind:
    """Classify a host value."""
    if value is MISSING:
        return ValueKind.MISSING
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, complex):
        return ValueKind.COMPLEX
    if isinstance(value, numbers.Number):
        return ValueKind.FLOAT
    if isinstance(value, (str, bytes, bytearray)):
        return ValueKind.STRING
    if has_custom_lookup(value):
        return ValueKind.CUSTOM
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    if isinstance(value, Sequence) and not is_namedtuple(value):
        return ValueKind.SEQUENCE
    if callable(value) and not isinstance(value, type):
        return ValueKind.CALLABLE
    return ValueKind.RECORD


def is_empty(value: object) -> bool:
    """Falsiness as sections see it.

    Empty: missing, ``None``, ``False``, numeric zero, a string that is
    blank after stripping, a zero-length sequence. Mappings and records are
    never empty, even when they hold nothing.
    """
    kind = kind_of(value)
    if kind in (ValueKind.MISSING, ValueKind.NULL):
        return True
    if kind in (ValueKind.BOOLEAN, ValueKind.INTEGER, ValueKind.FLOAT, ValueKind.COMPLEX):
        return value == 0
    if kind is ValueKind.STRING:
        return len(value.strip()) == 0  # type: ignore[union-attr]
    if kind is ValueKind.SEQUENCE:
        return len(value) == 0  # type: ignore[arg-type]
    return False


def to_str(value: object) -> str:
    """Stringify a resolved value for output."""
    if value is None or value is MISSING:
        return ""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


def accepts_args(func: Callable[..., Any], count: int) -> bool:
    """Whether ``func`` can be called with ``count`` positional arguments.

    Callables whose signature cannot be inspected (some builtins) are
    assumed to accept the call.
    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return True
    try:
        signature.bind(*([None] * count))
    except TypeError:
        return False
    return True


def field_by_alias(record: object, name: str) -> Any:
    """Return the record field whose declared alternate name is ``name``.

    Alternate names come from dataclass field metadata (``alias``, or a
    ``json`` tag such as ``"user_name,omitempty"``) and from pydantic-style
    ``model_fields`` aliases. Returns ``MISSING`` when no field matches.
    """
    if dataclasses.is_dataclass(record) and not isinstance(record, type):
        for field in dataclasses.fields(record):
            alias = field.metadata.get("alias")
            if alias is None:
                tag = field.metadata.get("json")
                if tag:
                    alias = tag.split(",", 1)[0]
                    if alias == "-":
                        continue
            if alias == name:
                return getattr(record, field.name)
        return MISSING

    model_fields = getattr(type(record), "model_fields", None)
    if isinstance(model_fields, Mapping):
        for field_name, info in model_fields.items():
            if getattr(info, "alias", None) == name:
                return getattr(record, field_name)
    return MISSING


def record_names(value: object) -> frozenset[str]:
    """Names a context value offers for lookup, for "did you mean" hints."""
    kind = kind_of(value)
    if kind is ValueKind.MAPPING:
        return frozenset(k for k in value if isinstance(k, str))  # type: ignore[union-attr]
    if kind is ValueKind.RECORD:
        if dataclasses.is_dataclass(value):
            return frozenset(f.name for f in dataclasses.fields(value))
        if is_namedtuple(value):
            return frozenset(type(value)._fields)  # type: ignore[attr-defined]
        return frozenset(n for n in getattr(value, "__dict__", ()) if not n.startswith("_"))
    return frozenset()
