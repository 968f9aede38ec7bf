"""Per-render state kept out of the user's data.

The renderer tracks which template it is in, the line of the tag being
rendered and how deep partials (and lambda re-renders) are nested. That
state lives in a ``ContextVar`` so it never mixes with the context stack
and stays isolated between threads and asyncio tasks.

Example:
    with render_context(template_name="page") as ctx:
        ...
        ctx.check_partial_depth("header")
        child = ctx.child_context("header")

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field

from stache.environment.exceptions import PartialDepthError

# Limit on nested partials and lambda re-renders
DEFAULT_MAX_PARTIAL_DEPTH = 50


@dataclass
class RenderContext:
    """State of one render call.

    Attributes:
        template_name: Template being rendered, for error messages
        source: Its source text, for error snippets
        line: Line of the tag currently being rendered
        partial_depth: Number of enclosing partials
        max_partial_depth: Limit on ``partial_depth``
        template_stack: (template_name, line) of each enclosing partial tag
    """

    template_name: str | None = None
    source: str | None = None
    line: int = 0

    partial_depth: int = 0
    max_partial_depth: int = DEFAULT_MAX_PARTIAL_DEPTH

    template_stack: list[tuple[str, int]] = field(default_factory=list)

    def check_partial_depth(self, partial_name: str) -> None:
        """Raise if entering ``partial_name`` would exceed the depth limit.

        Raises:
            PartialDepthError: If depth >= max_partial_depth
        """
        if self.partial_depth >= self.max_partial_depth:
            raise PartialDepthError(
                f"Maximum partial depth exceeded ({self.max_partial_depth}) "
                f"when rendering '{partial_name}'",
                template_name=self.template_name,
                lineno=self.line or None,
                suggestion="Check for circular partials: A → B → A",
                template_stack=self.template_stack,
            )

    def child_context(
        self, template_name: str | None = None, source: str | None = None
    ) -> RenderContext:
        """Context for a nested render, one level deeper.

        The current location is appended to ``template_stack``.
        """
        new_stack = self.template_stack.copy()
        if self.template_name and self.line > 0:
            new_stack.append((self.template_name, self.line))

        return RenderContext(
            template_name=template_name or self.template_name,
            source=source,
            line=0,
            partial_depth=self.partial_depth + 1,
            max_partial_depth=self.max_partial_depth,
            template_stack=new_stack,
        )


_render_context: ContextVar[RenderContext | None] = ContextVar(
    "stache_render_context",
    default=None,
)


def get_render_context() -> RenderContext | None:
    """Current render context, or None outside a render call."""
    return _render_context.get()


@contextmanager
def render_context(
    template_name: str | None = None,
    source: str | None = None,
    max_partial_depth: int = DEFAULT_MAX_PARTIAL_DEPTH,
) -> Iterator[RenderContext]:
    """Set a fresh ``RenderContext`` for the duration of the block."""
    ctx = RenderContext(
        template_name=template_name,
        source=source,
        max_partial_depth=max_partial_depth,
    )
    token = _render_context.set(ctx)
    try:
        yield ctx
    finally:
        _render_context.reset(token)


@contextmanager
def nested_render_context(ctx: RenderContext) -> Iterator[RenderContext]:
    """Make ``ctx`` current for the block, restoring the previous one after."""
    token: Token[RenderContext | None] = _render_context.set(ctx)
    try:
        yield ctx
    finally:
        _render_context.reset(token)
