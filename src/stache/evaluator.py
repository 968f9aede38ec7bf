"""Path expression evaluation against a context stack.

A tag name is a small expression language evaluated at render time:

    name            search the stack, innermost context first
    .               the innermost context itself
    a.b.c           attribute/key access, left to right
    items[0]        index a sequence, or key a mapping
    users[id].name  index expressions are themselves evaluated
    fmt(a, 'x')     call a callable found on the stack
    'text' 42 1.5   literals: quoted strings, ints, floats, complex, booleans

Evaluation scans for the first ``.``, ``[`` or ``(`` and dispatches on it;
the part before is evaluated first and becomes the *left value* for the
rest. A left value restricts lookup to that single value instead of the
whole stack.

Name lookup, for each context from innermost out:

1. an object implementing ``lookup(name)`` answers for itself
2. ``.`` returns the context
3. records: a public attribute (zero-argument methods are called), then a
   field declared under an alternate name
4. mappings: the key
5. sequences: ``length`` and ``len``

Example:
    >>> resolve([{"user": {"name": "Ada"}}], "user.name")
    'Ada'
    >>> resolve([{"xs": [1, 2, 3]}], "xs.length")
    3

"""

from __future__ import annotations

import inspect
import logging
import operator
from collections.abc import Callable, Sequence
from typing import Any

from stache.environment.exceptions import (
    InvalidVariableError,
    MissingVariableError,
    TemplateRuntimeError,
)
from stache.values import MISSING, ValueKind, accepts_args, field_by_alias, kind_of

logger = logging.getLogger(__name__)

# Marks "no left value": look names up on the whole stack
NO_LEFT: Any = object()

_INT64_MIN = -(2**63)
_UINT64_MAX = 2**64 - 1

_BOOLEANS = {
    "true": True,
    "True": True,
    "TRUE": True,
    "false": False,
    "False": False,
    "FALSE": False,
}

_QUOTES = "'\""
_NUMBER_START = "0123456789+-."


# ---------------------------------------------------------------------------
# Literals
# ---------------------------------------------------------------------------


def parse_literal(text: str) -> Any:
    """Return the literal value of ``text``, or ``MISSING`` if it is not one.

    Recognized, in order: a string wrapped in matching quotes, an integer
    (any base prefix, within signed or unsigned 64-bit range), a float, a
    complex number (``1+2j``; a trailing ``i`` is accepted for ``j``), and
    ``true``/``false`` in lower, title or upper case.
    """
    if len(text) >= 2 and text[0] in _QUOTES and text[-1] == text[0]:
        return text[1:-1]
    if not text or text[0] not in _NUMBER_START:
        return _BOOLEANS.get(text, MISSING)

    try:
        number: Any = int(text, 0)
    except ValueError:
        pass
    else:
        if _INT64_MIN <= number <= _UINT64_MAX:
            return number

    try:
        return float(text)
    except ValueError:
        pass

    if text[-1] in "ij":
        try:
            return complex(text[:-1] + "j")
        except ValueError:
            pass
    return MISSING


# ---------------------------------------------------------------------------
# Scanning helpers
# ---------------------------------------------------------------------------


def _first_structural(expression: str) -> int:
    """Index of the first ``.``, ``[`` or ``(`` outside quotes, or -1."""
    quote = ""
    for i, ch in enumerate(expression):
        if quote:
            if ch == quote:
                quote = ""
        elif ch in _QUOTES:
            quote = ch
        elif ch in ".[(":
            return i
    return -1


def _matching(expression: str, start: int, open_ch: str, close_ch: str) -> int:
    """Index of the bracket closing the one at ``start``, or -1."""
    depth = 0
    quote = ""
    for i in range(start, len(expression)):
        ch = expression[i]
        if quote:
            if ch == quote:
                quote = ""
        elif ch in _QUOTES:
            quote = ch
        elif ch == open_ch:
            depth += 1
        elif ch == close_ch:
            depth -= 1
            if depth == 0:
                return i
    return -1


def split_args(text: str) -> list[str]:
    """Split a call's argument list on top-level commas."""
    if not text.strip():
        return []

    args: list[str] = []
    depth = 0
    quote = ""
    start = 0
    for i, ch in enumerate(text):
        if quote:
            if ch == quote:
                quote = ""
        elif ch in _QUOTES:
            quote = ch
        elif ch in "([":
            depth += 1
        elif ch in ")]":
            depth -= 1
        elif ch == "," and depth == 0:
            args.append(text[start:i].strip())
            start = i + 1
    args.append(text[start:].strip())
    return args


def _rest(expression: str, after: int) -> str:
    rest = expression[after:]
    return rest[1:] if rest.startswith(".") else rest


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------


def _public_attr(obj: Any, name: str) -> Any:
    """``getattr`` restricted to public identifiers; ``MISSING`` if absent."""
    if not name.isidentifier() or name.startswith("_"):
        return MISSING
    try:
        return getattr(obj, name)
    except AttributeError:
        return MISSING
    except Exception as exc:
        logger.debug("attribute %r of %s raised %r", name, type(obj).__name__, exc)
        raise TemplateRuntimeError(
            f"error reading {name!r} from {type(obj).__name__}: {exc}",
            expression=name,
        ) from exc


def _is_bound_to(value: Any, owner: Any) -> bool:
    return (inspect.ismethod(value) or inspect.isbuiltin(value)) and getattr(
        value, "__self__", None
    ) is owner


def _chain(stack: Sequence[Any], left: Any) -> Sequence[Any]:
    return stack if left is NO_LEFT else (left,)


def lookup_name(stack: Sequence[Any], name: str, left: Any = NO_LEFT) -> Any:
    """Look a bare name up on the stack (or on ``left`` alone).

    Raises:
        MissingVariableError: No context offers ``name``.
    """
    for ctx in _chain(stack, left):
        kind = kind_of(ctx)
        if kind is ValueKind.CUSTOM:
            return ctx.lookup(name)
        if name == ".":
            return ctx

        if kind is ValueKind.RECORD:
            value = _public_attr(ctx, name)
            if value is not MISSING:
                if _is_bound_to(value, ctx) and accepts_args(value, 0):
                    return value()
                return value
            value = field_by_alias(ctx, name)
            if value is not MISSING:
                return value
        elif kind is ValueKind.MAPPING:
            if name in ctx:
                return ctx[name]
        elif kind is ValueKind.SEQUENCE:
            if name in ("length", "len"):
                return len(ctx)

    raise MissingVariableError(name)


def find_callable(
    stack: Sequence[Any], name: str, argc: int, left: Any = NO_LEFT
) -> Callable[..., Any]:
    """Find a callable named ``name`` that takes ``argc`` positional arguments.

    Records are searched for a public attribute, mappings for a key. The
    innermost match wins.

    Raises:
        InvalidVariableError: Nothing on the stack matches.
    """
    for ctx in _chain(stack, left):
        kind = kind_of(ctx)
        if kind is ValueKind.MAPPING:
            candidate = ctx.get(name, MISSING) if name in ctx else MISSING
        elif kind in (ValueKind.RECORD, ValueKind.CUSTOM, ValueKind.CALLABLE):
            candidate = _public_attr(ctx, name)
        else:
            continue
        if callable(candidate) and accepts_args(candidate, argc):
            return candidate

    plural = "" if argc == 1 else "s"
    raise InvalidVariableError(name, f"no callable accepting {argc} argument{plural}")


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------


def index_value(target: Any, key: Any, expression: str) -> Any:
    """Apply ``target[key]`` with the engine's indexing rules."""
    kind = kind_of(target)
    if kind is ValueKind.MAPPING:
        try:
            return target[key]
        except (KeyError, TypeError):
            raise InvalidVariableError(expression, f"key {key!r} not found") from None

    if kind is ValueKind.SEQUENCE:
        if isinstance(key, bool):
            raise InvalidVariableError(expression, f"index {key!r} is not an integer")
        try:
            index = operator.index(key)
        except TypeError:
            if isinstance(key, float) and key.is_integer():
                index = int(key)
            else:
                raise InvalidVariableError(
                    expression, f"index {key!r} is not an integer"
                ) from None
        if not 0 <= index < len(target):
            raise InvalidVariableError(expression, f"index {index} out of range")
        return target[index]

    raise InvalidVariableError(expression, f"cannot index a {kind.value} value")


def _resolve_dotted(stack: Sequence[Any], expression: str, left: Any, dot: int) -> Any:
    value = resolve(stack, expression[:dot], left)
    tail = expression[dot + 1 :]
    if tail[:1].isdigit():
        raise InvalidVariableError(
            expression, "a name after '.' cannot start with a digit, use [index]"
        )
    return resolve(stack, tail, value)


def _resolve_index(stack: Sequence[Any], expression: str, left: Any, start: int) -> Any:
    end = _matching(expression, start, "[", "]")
    if end == -1:
        raise InvalidVariableError(expression, "unbalanced '['")

    target_name = expression[:start].strip()
    if target_name:
        target = resolve(stack, target_name, left)
    elif left is not NO_LEFT:
        target = left
    else:
        raise InvalidVariableError(expression, "nothing to index")

    key = resolve(stack, expression[start + 1 : end].strip())
    value = index_value(target, key, expression)

    rest = _rest(expression, end + 1)
    return resolve(stack, rest, value) if rest else value


def _resolve_call(stack: Sequence[Any], expression: str, left: Any, start: int) -> Any:
    end = _matching(expression, start, "(", ")")
    if end == -1:
        raise InvalidVariableError(expression, "unbalanced '('")

    arg_exprs = split_args(expression[start + 1 : end])
    func = find_callable(stack, expression[:start].strip(), len(arg_exprs), left)
    args = [resolve(stack, arg) for arg in arg_exprs]
    result = func(*args)

    rest = _rest(expression, end + 1)
    return resolve(stack, rest, result) if rest else result


def resolve(stack: Sequence[Any], expression: str, left: Any = NO_LEFT) -> Any:
    """Evaluate a path expression.

    Args:
        stack: Contexts, innermost first.
        expression: The tag name, e.g. ``user.address[0].city``.
        left: Value to resolve against instead of the stack.

    Raises:
        MissingVariableError: A name was not found.
        InvalidVariableError: The path is malformed or misapplied.

    Exceptions raised by host callables propagate unchanged.
    """
    literal = parse_literal(expression)
    if literal is not MISSING:
        return literal

    pos = _first_structural(expression)
    if pos != -1:
        marker = expression[pos]
        if marker == "." and expression != ".":
            return _resolve_dotted(stack, expression, left, pos)
        if marker == "[":
            return _resolve_index(stack, expression, left, pos)
        if marker == "(":
            return _resolve_call(stack, expression, left, pos)

    return lookup_name(stack, expression, left)


def resolve_or_missing(stack: Sequence[Any], expression: str) -> Any:
    """Like ``resolve`` but returns ``MISSING`` for names that are not found."""
    try:
        return resolve(stack, expression)
    except MissingVariableError:
        return MISSING
