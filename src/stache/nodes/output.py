"""Output nodes for the stache element tree."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from stache.nodes.base import Node


class TagType(Enum):
    """Kind of tag a node was parsed from, for introspection."""

    VARIABLE = "variable"
    SECTION = "section"
    INVERTED_SECTION = "inverted_section"
    PARTIAL = "partial"


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Verbatim text between tags."""

    value: str


@dataclass(frozen=True, slots=True)
class Variable(Node):
    """Interpolation: {{name}}, or raw with {{{name}}} / {{&name}}"""

    name: str
    raw: bool = False

    @property
    def tag_type(self) -> TagType:
        return TagType.VARIABLE
