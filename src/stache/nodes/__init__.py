"""Element tree for compiled stache templates.

Parsing produces a tree of frozen dataclasses:

- ``Text``: verbatim text
- ``Variable``: ``{{name}}`` / ``{{{name}}}`` / ``{{&name}}``
- ``Section``: ``{{#name}}...{{/name}}`` and ``{{^name}}...{{/name}}``
- ``Partial``: ``{{>name}}``
- ``TemplateNode``: the root

Comments and delimiter changes leave no node behind.
"""

from stache.nodes.base import Node
from stache.nodes.output import TagType, Text, Variable
from stache.nodes.structure import Partial, Section, TemplateNode, extract_tags

__all__ = [
    "Node",
    "Partial",
    "Section",
    "TagType",
    "TemplateNode",
    "Text",
    "Variable",
    "extract_tags",
]
