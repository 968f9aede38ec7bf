"""Stache Environment: configuration and compile entry point.

The Environment holds every rendering policy (escaping, formatting, the
missing-variable policy, delimiters, partial loading) and compiles
template source into ``Template`` objects that carry it.

Example:
    >>> env = Environment(loader=FileSystemLoader("templates/"), strict=True)
    >>> env.get_template("page").render(title="Home")

    >>> Environment().render_string("{{a}} & {{{b}}}", a="<x>", b="<y>")
    '&lt;x&gt; & <y>'

Thread-Safety:
    Configure an Environment once, then share it freely. Nothing is
    cached: every ``get_template()`` call and every partial tag reloads
    and recompiles its source.

"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from stache.environment.exceptions import TemplateNotFoundError
from stache.environment.loaders import Loader
from stache.parser import DEFAULT_CLOSE_TAG, DEFAULT_OPEN_TAG, Parser
from stache.render_context import DEFAULT_MAX_PARTIAL_DEPTH
from stache.template import Template
from stache.utils.html import html_escape

if TYPE_CHECKING:
    from stache.nodes import TemplateNode

logger = logging.getLogger(__name__)

_NON_EMPTY_LINE = re.compile(r"^(.+)$", re.MULTILINE)


@dataclass
class Environment:
    """Rendering configuration shared by the templates it compiles.

    Attributes:
        loader: Source of partials and named templates
        escape: Applied to un-prefixed ``{{name}}`` output (default: HTML)
        formatter: Converts every variable value to output text; when set,
            escaping is skipped and un-prefixed variables compile as raw
        strict: Raise ``MissingVariableError`` for unknown names instead of
            rendering them as empty
        force_raw: Compile un-prefixed ``{{name}}`` variables as raw
        open_tag: Initial open delimiter for ``from_string``/``get_template``
        close_tag: Initial close delimiter
        max_partial_depth: Nesting limit for partials and lambda re-renders

    Partials and text rendered by a lambda always compile with ``{{ }}``
    and this environment's ``force_raw``, regardless of the delimiters of
    the template that includes them.
    """

    loader: Loader | None = None
    escape: Callable[[str], str] = html_escape
    formatter: Callable[[Any], str] | None = None
    strict: bool = False
    force_raw: bool = False
    open_tag: str = DEFAULT_OPEN_TAG
    close_tag: str = DEFAULT_CLOSE_TAG
    max_partial_depth: int = DEFAULT_MAX_PARTIAL_DEPTH

    def __post_init__(self) -> None:
        if not self.open_tag or not self.close_tag:
            raise ValueError("open_tag and close_tag must be non-empty")
        if self.max_partial_depth < 0:
            raise ValueError("max_partial_depth must be >= 0")
        if self.formatter is not None:
            self.force_raw = True

    # -- compiling ---------------------------------------------------------

    def parse(
        self,
        source: str,
        name: str | None = None,
        *,
        open_tag: str = DEFAULT_OPEN_TAG,
        close_tag: str = DEFAULT_CLOSE_TAG,
    ) -> TemplateNode:
        """Parse ``source`` with this environment's ``force_raw``.

        Raises:
            ParseError: On a syntax error
        """
        return Parser(
            source,
            open_tag=open_tag,
            close_tag=close_tag,
            force_raw=self.force_raw,
            name=name,
        ).parse()

    def from_string(self, source: str, name: str | None = None) -> Template:
        """Compile template source.

        Example:
            >>> env.from_string("Hi {{name}}").render(name="Ada")
            'Hi Ada'
        """
        root = self.parse(source, name, open_tag=self.open_tag, close_tag=self.close_tag)
        return Template(self, root, name=name, source=source)

    def get_template(self, name: str) -> Template:
        """Load and compile a template by name through the loader.

        Raises:
            TemplateNotFoundError: No loader, or the loader has no such template
            ParseError: The template source is invalid
        """
        source, filename = self._get_source(name)
        root = self.parse(source, name, open_tag=self.open_tag, close_tag=self.close_tag)
        return Template(self, root, name=name, filename=filename, source=source)

    def get_partial(self, name: str, indent: str = "") -> Template:
        """Load and compile the partial ``name``.

        Every non-empty line of the source is prefixed with ``indent``
        before compiling.
        """
        source, filename = self._get_source(name)
        if indent:
            source = _NON_EMPTY_LINE.sub(lambda m: indent + m.group(1), source)
        logger.debug("loaded partial %r from %s", name, filename or "<loader>")
        root = self.parse(source, name)
        return Template(self, root, name=name, filename=filename, source=source)

    def render_string(self, source: str, *contexts: Any, **kwargs: Any) -> str:
        """Compile and render ``source`` in one step."""
        return self.from_string(source).render(*contexts, **kwargs)

    def _get_source(self, name: str) -> tuple[str, str | None]:
        if self.loader is None:
            raise TemplateNotFoundError(f"Partial '{name}' not found: no loader configured")
        return self.loader.get_source(name)
