"""Template structure nodes for the stache element tree."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from stache.nodes.base import Node
from stache.nodes.output import TagType, Text


def extract_tags(body: Sequence[Node]) -> tuple[Node, ...]:
    """Return the tag nodes of ``body``, skipping text runs."""
    return tuple(node for node in body if not isinstance(node, Text))


@dataclass(frozen=True, slots=True)
class Section(Node):
    """Section: {{#name}}...{{/name}}, inverted with {{^name}}...{{/name}}

    ``lineno`` is the line of the opening tag.
    """

    name: str
    inverted: bool
    body: Sequence[Node]

    @property
    def tag_type(self) -> TagType:
        return TagType.INVERTED_SECTION if self.inverted else TagType.SECTION

    def tags(self) -> tuple[Node, ...]:
        return extract_tags(self.body)


@dataclass(frozen=True, slots=True)
class Partial(Node):
    """Include another template: {{>name}}

    ``indent`` is the whitespace that preceded a standalone partial tag;
    it is prepended to every line of the included template.
    """

    name: str
    indent: str = ""

    @property
    def tag_type(self) -> TagType:
        return TagType.PARTIAL

    def tags(self) -> tuple[Node, ...]:
        return ()


@dataclass(frozen=True, slots=True)
class TemplateNode(Node):
    """Root of a compiled template.

    ``open_tag``/``close_tag`` are the delimiters in effect when parsing
    finished (a ``{{=<% %>=}}`` tag at top level changes them).
    """

    body: Sequence[Node]
    open_tag: str = "{{"
    close_tag: str = "}}"
