"""Stache Template: compiled template object ready for rendering.

A Template wraps the element tree produced by the parser together with
the Environment that compiled it, and provides the ``render()`` family.

Architecture:
    ```
    Template
    ├── _env: Environment      # escape, formatter, policy, partial loader
    ├── _root: TemplateNode    # immutable element tree
    ├── _source: str           # for error snippets and introspection
    └── _name, _filename       # for error messages
    ```

StringBuilder Pattern:
    ``render()`` collects output chunks with ``buf.append`` and returns
    ``''.join(buf)``. ``render_to()`` writes each chunk straight to the
    given stream instead.

Context Stack:
    Positional contexts are searched first to last. Keyword arguments form
    one more mapping searched before all of them:

        >>> t.render({"name": "outer"}, name="kw")
        'Hello kw'

Thread-Safety:
    - Templates are immutable after construction
    - ``render()`` creates only local state (stack and buffer)
    - Multiple threads can render the same template concurrently

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from stache.render_context import render_context
from stache.template.introspection import TemplateIntrospectionMixin
from stache.template.renderer import Renderer

if TYPE_CHECKING:
    from stache.environment import Environment
    from stache.nodes import TemplateNode


class Writable(Protocol):
    def write(self, text: str, /) -> Any: ...


class Template(TemplateIntrospectionMixin):
    """Compiled template ready for rendering.

    Templates are created by ``Environment.from_string()`` and
    ``Environment.get_template()``; they are immutable and safe to render
    from several threads at once.

    Attributes:
        name: Template identifier (for error messages)
        filename: Source file path, when loaded from disk
        source: Template source text
        open_tag, close_tag: Delimiters in effect at the end of the source

    Example:
        >>> from stache import Environment
        >>> env = Environment()
        >>> t = env.from_string("Hello, {{name}}!")
        >>> t.render(name="World")
        'Hello, World!'
        >>> t.render({"name": "<b>"})
        'Hello, &lt;b&gt;!'

    """

    __slots__ = ("_env", "_filename", "_name", "_root", "_source")

    def __init__(
        self,
        env: Environment,
        root: TemplateNode,
        name: str | None = None,
        filename: str | None = None,
        source: str | None = None,
    ):
        self._env = env
        self._root = root
        self._name = name
        self._filename = filename
        self._source = source

    @property
    def environment(self) -> Environment:
        return self._env

    @property
    def name(self) -> str | None:
        """Template name."""
        return self._name

    @property
    def filename(self) -> str | None:
        """Source filename."""
        return self._filename

    @property
    def source(self) -> str | None:
        return self._source

    @property
    def root(self) -> TemplateNode:
        """The compiled element tree."""
        return self._root

    @property
    def open_tag(self) -> str:
        return self._root.open_tag

    @property
    def close_tag(self) -> str:
        return self._root.close_tag

    def render(self, *contexts: Any, **kwargs: Any) -> str:
        """Render the template against ``contexts``.

        Args:
            *contexts: Host values searched for names, first to last
            **kwargs: Extra names, searched before ``contexts``

        Returns:
            Rendered template as string

        Raises:
            MissingVariableError: A name was not found (strict environments)
            InvalidVariableError: A path expression could not be applied
            TemplateNotFoundError: A partial could not be loaded
            TemplateSyntaxError: A partial or lambda output failed to parse
        """
        buf: list[str] = []
        self._render_stack(buf.append, _stack(contexts, kwargs))
        return "".join(buf)

    def render_to(self, out: Writable, *contexts: Any, **kwargs: Any) -> None:
        """Render directly to ``out`` (anything with a ``write(str)`` method).

        Output already written stays written if rendering fails midway.
        """
        self._render_stack(out.write, _stack(contexts, kwargs))

    def render_in_layout(self, layout: Template, *contexts: Any, **kwargs: Any) -> str:
        """Render this template, then ``layout`` with the result as ``content``.

        The layout sees ``{"content": <this template's output>}`` as its
        innermost context, followed by the same contexts.

        Example:
            >>> layout = env.from_string("<main>{{{content}}}</main>")
            >>> env.from_string("Hi {{name}}").render_in_layout(layout, name="Ada")
            '<main>Hi Ada</main>'
        """
        stack = _stack(contexts, kwargs)
        content = self.render(*stack)
        buf: list[str] = []
        layout._render_stack(buf.append, [{"content": content}, *stack])
        return "".join(buf)

    def render_in_layout_to(
        self, out: Writable, layout: Template, *contexts: Any, **kwargs: Any
    ) -> None:
        """Like ``render_in_layout()`` but writes the layout output to ``out``."""
        stack = _stack(contexts, kwargs)
        content = self.render(*stack)
        layout._render_stack(out.write, [{"content": content}, *stack])

    def _render_stack(self, write: Any, stack: list[Any]) -> None:
        env = self._env
        with render_context(
            template_name=self._name,
            source=self._source,
            max_partial_depth=env.max_partial_depth,
        ) as ctx:
            Renderer(env, write, ctx, name=self._name, source=self._source).render(
                self._root.body, stack
            )

    def __repr__(self) -> str:
        return f"<Template {self._name or '(inline)'}>"


def _stack(contexts: tuple[Any, ...], kwargs: dict[str, Any]) -> list[Any]:
    if kwargs:
        return [kwargs, *contexts]
    return list(contexts)
