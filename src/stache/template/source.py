"""Turn an element tree back into template text.

Lambdas receive their section body as text. The body is rebuilt from the
tree with the default ``{{ }}`` delimiters, whatever delimiters the
template was written with, so the text can be compiled again by the
lambda's ``render`` callback:

    {{#wrap}}Hi {{name}}{{/wrap}}   →   wrap("Hi {{name}}", render)

Comments, delimiter changes and standalone whitespace do not survive the
round trip, and ``{{&name}}`` comes back as ``{{{name}}}``.
"""

from __future__ import annotations

from collections.abc import Iterable

from stache.nodes import Node, Partial, Section, Text, Variable
from stache.parser import DEFAULT_CLOSE_TAG, DEFAULT_OPEN_TAG

_O = DEFAULT_OPEN_TAG
_C = DEFAULT_CLOSE_TAG


def _write(node: Node, buf: list[str]) -> None:
    if isinstance(node, Text):
        buf.append(node.value)
    elif isinstance(node, Variable):
        if node.raw:
            buf.append(f"{_O}{{{node.name}}}{_C}")
        else:
            buf.append(f"{_O}{node.name}{_C}")
    elif isinstance(node, Section):
        sigil = "^" if node.inverted else "#"
        buf.append(f"{_O}{sigil}{node.name}{_C}")
        for child in node.body:
            _write(child, buf)
        buf.append(f"{_O}/{node.name}{_C}")
    elif isinstance(node, Partial):
        buf.append(f"{_O}>{node.name}{_C}")
    else:
        raise TypeError(f"cannot serialize {type(node).__name__}")


def body_source(body: Iterable[Node]) -> str:
    """Serialize a node sequence to template text."""
    buf: list[str] = []
    for node in body:
        _write(node, buf)
    return "".join(buf)
