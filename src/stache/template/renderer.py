"""Tree-walking renderer.

A ``Renderer`` walks a node sequence against a context stack and hands
each piece of output to a ``write`` callable. ``Template.render`` passes
``buf.append`` and joins the buffer at the end; ``Template.render_to``
passes a stream's ``write``.

Context stack:
    A list of host values, innermost first. A section body renders with
    the section value pushed onto a new list; the caller's list is never
    modified.

Sections:
    ========================  ==========================================
    value                     body renders
    ========================  ==========================================
    empty (see is_empty)      never (once for ``{{^name}}``)
    sequence                  once per item, item pushed
    callable                  never; the callable renders (lambda)
    anything else             once, value pushed
    ========================  ==========================================

Thread-Safety:
    A Renderer writes to one output and must not be shared. Templates
    create one per render call.

"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

from stache.environment.exceptions import (
    InvalidVariableError,
    MissingVariableError,
    TemplateRuntimeError,
    build_source_snippet,
)
from stache.evaluator import resolve, resolve_or_missing
from stache.render_context import (
    RenderContext,
    get_render_context,
    nested_render_context,
)
from stache.template.source import body_source
from stache.values import (
    ValueKind,
    accepts_args,
    is_empty,
    kind_of,
    record_names,
    to_str,
)

if TYPE_CHECKING:
    from stache.environment import Environment
    from stache.nodes import Node, Partial, Section, Text, Variable

logger = logging.getLogger(__name__)


class Renderer:
    """Render nodes of one template to ``write``.

    Args:
        env: Environment supplying escape, formatter, policy and partials.
        write: Output sink, called with each chunk of text.
        render_ctx: Per-render state; defaults to the current one.
        name: Template name, for error messages.
        source: Template source, for error snippets.
    """

    __slots__ = ("_ctx", "_dispatch", "_env", "_name", "_source", "_write")

    def __init__(
        self,
        env: Environment,
        write: Callable[[str], Any],
        render_ctx: RenderContext | None = None,
        *,
        name: str | None = None,
        source: str | None = None,
    ):
        self._env = env
        self._write = write
        self._name = name
        self._source = source
        self._ctx = render_ctx or get_render_context() or RenderContext(
            template_name=name,
            source=source,
            max_partial_depth=env.max_partial_depth,
        )
        self._dispatch: dict[str, Callable[[Any, list[Any]], None]] = {
            "Text": self._render_text,
            "Variable": self._render_variable,
            "Section": self._render_section,
            "Partial": self._render_partial,
        }

    def render(self, body: Sequence[Node], stack: list[Any]) -> None:
        """Render ``body`` against ``stack`` (innermost context first)."""
        dispatch = self._dispatch
        for node in body:
            dispatch[type(node).__name__](node, stack)

    # -- node handlers -----------------------------------------------------

    def _render_text(self, node: Text, stack: list[Any]) -> None:
        self._write(node.value)

    def _render_variable(self, node: Variable, stack: list[Any]) -> None:
        self._ctx.line = node.lineno
        try:
            value = self._resolve(node.name, stack, node.lineno)
        except MissingVariableError:
            if not self._env.strict:
                logger.debug(
                    "missing variable %r in %s:%d rendered as empty",
                    node.name,
                    self._name or "<template>",
                    node.lineno,
                )
                return
            raise self._missing(node.name, stack, node.lineno) from None

        if value is None:
            return

        env = self._env
        if env.formatter is not None:
            self._write(env.formatter(value))
        elif node.raw:
            self._write(to_str(value))
        else:
            self._write(env.escape(to_str(value)))

    def _render_section(self, node: Section, stack: list[Any]) -> None:
        self._ctx.line = node.lineno
        try:
            value = resolve_or_missing(stack, node.name)
        except InvalidVariableError as exc:
            raise self._locate(exc, node.lineno) from None

        if node.inverted:
            if is_empty(value):
                self.render(node.body, stack)
            return

        if is_empty(value):
            return

        kind = kind_of(value)
        if kind is ValueKind.SEQUENCE:
            for item in value:
                self.render(node.body, [item, *stack])
        elif kind is ValueKind.CALLABLE:
            self._render_lambda(node, value, stack)
        else:
            self.render(node.body, [value, *stack])

    def _render_lambda(
        self, node: Section, func: Callable[..., Any], stack: list[Any]
    ) -> None:
        if not accepts_args(func, 2):
            raise TemplateRuntimeError(
                f"lambda {node.name!r} must accept (text, render)",
                expression=f"{{{{#{node.name}}}}}",
                template_name=self._name,
                lineno=node.lineno,
                suggestion=f"Define it as: def {node.name}(text, render): ...",
                template_stack=self._ctx.template_stack,
            )

        ctx = self._ctx
        env = self._env
        name = self._name

        def render(text: str) -> str:
            ctx.check_partial_depth(node.name)
            logger.debug("lambda %r re-rendering %d chars", node.name, len(text))
            tree = env.parse(text, name=name)
            buf: list[str] = []
            child = ctx.child_context(name, text)
            with nested_render_context(child):
                Renderer(env, buf.append, child, name=name, source=text).render(
                    tree.body, stack
                )
            return "".join(buf)

        self._write(to_str(func(body_source(node.body), render)))

    def _render_partial(self, node: Partial, stack: list[Any]) -> None:
        ctx = self._ctx
        ctx.line = node.lineno
        ctx.check_partial_depth(node.name)

        partial = self._env.get_partial(node.name, indent=node.indent)
        logger.debug("rendering partial %r", node.name)

        child = ctx.child_context(partial.name, partial.source)
        with nested_render_context(child):
            Renderer(
                self._env,
                self._write,
                child,
                name=partial.name,
                source=partial.source,
            ).render(partial.root.body, stack)

    # -- errors ------------------------------------------------------------

    def _resolve(self, expression: str, stack: list[Any], lineno: int) -> Any:
        try:
            return resolve(stack, expression)
        except InvalidVariableError as exc:
            raise self._locate(exc, lineno) from None

    def _locate(self, exc: InvalidVariableError, lineno: int) -> InvalidVariableError:
        """Attach the template location to a resolver error."""
        if exc.template_name is not None:
            return exc
        return InvalidVariableError(
            exc.name,
            exc.reason,
            template_name=self._name,
            lineno=lineno,
            template_stack=self._ctx.template_stack,
        )

    def _missing(self, name: str, stack: list[Any], lineno: int) -> MissingVariableError:
        available: set[str] = set()
        for ctx in stack:
            available |= record_names(ctx)
        snippet = build_source_snippet(self._source, lineno) if self._source else None
        return MissingVariableError(
            name,
            template=self._name,
            lineno=lineno,
            available_names=frozenset(available),
            source_snippet=snippet,
        )
