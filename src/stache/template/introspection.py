"""Template introspection mixin.

Adds read-only queries over the compiled element tree to the Template
class via mixin inheritance.

"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from typing import TYPE_CHECKING

from stache.evaluator import parse_literal
from stache.nodes import Partial, Section, Variable, extract_tags
from stache.values import MISSING

if TYPE_CHECKING:
    from stache.nodes import Node, TemplateNode


def _walk(body: Sequence[Node]) -> Iterator[Node]:
    for node in body:
        yield node
        if isinstance(node, Section):
            yield from _walk(node.body)


def _head(expression: str) -> str | None:
    """Leading name of a path expression, or None for ``.`` and literals."""
    if expression == "." or parse_literal(expression) is not MISSING:
        return None
    for i, ch in enumerate(expression):
        if ch in ".[(":
            return expression[:i] or None
    return expression


class TemplateIntrospectionMixin:
    """Mixin adding tag-tree queries to Template.

    Requires the host class to define:
        _root: TemplateNode
    """

    if TYPE_CHECKING:
        _root: TemplateNode

    def tags(self) -> tuple[Node, ...]:
        """Top-level tags of the template, in source order, without text.

        Each tag has a ``tag_type`` and a ``name``; sections expose their own
        children through ``Section.tags()``.

        Example:
            >>> t = env.from_string("{{#items}}{{name}}{{/items}} {{>footer}}")
            >>> [tag.tag_type.name for tag in t.tags()]
            ['SECTION', 'PARTIAL']
        """
        return extract_tags(self._root.body)

    def partial_names(self) -> frozenset[str]:
        """Names of all partials referenced anywhere in the template."""
        return frozenset(
            node.name for node in _walk(self._root.body) if isinstance(node, Partial)
        )

    def required_context(self) -> frozenset[str]:
        """Top-level names the template looks up on the caller's context.

        Only tags that resolve against the caller's stack are considered:
        tags inside a (non-inverted) section may resolve against the section
        value instead, so they are skipped. Partials are not followed.

        Example:
            >>> t = env.from_string("{{title}} {{#author}}{{name}}{{/author}}")
            >>> sorted(t.required_context())
            ['author', 'title']
        """
        names: set[str] = set()
        pending: list[Node] = list(self._root.body)
        while pending:
            node = pending.pop()
            if isinstance(node, (Variable, Section)):
                head = _head(node.name)
                if head:
                    names.add(head)
            if isinstance(node, Section) and node.inverted:
                pending.extend(node.body)
        return frozenset(names)

    def validate_context(self, context: Mapping[str, object]) -> list[str]:
        """Names from ``required_context()`` that ``context`` does not provide.

        Only top-level keys are checked: ``{{page.title}}`` needs ``page``
        but ``page.title`` itself is not verified.

        Example:
            >>> t = env.from_string("{{title}} by {{author.name}}")
            >>> t.validate_context({"title": "Hello"})
            ['author']
        """
        return sorted(self.required_context().difference(context))
