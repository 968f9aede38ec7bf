"""Exceptions for the stache template system.

Exception Hierarchy:
TemplateError
├── TemplateNotFoundError     # Partial/template not found by loader
├── TemplateSyntaxError       # Compile-time error
│   └── ParseError            # Classified parse failure (line + ErrorCode)
├── TemplateRuntimeError      # Render-time error with location and hints
│   ├── InvalidVariableError  # Malformed index/call path, wrong target kind
│   └── PartialDepthError     # Partials nested past max_partial_depth
└── MissingVariableError      # Name not found anywhere on the context stack

Compile-time errors are always fatal. At render time a missing variable is
only an error when the environment is strict; invalid variables, exceptions
raised by template callables and loader failures always abort the render.

Example:
    ```
    MissingVariableError: missing variable 'titl' in article.mustache:5. Did you mean 'title'?
       |
    >  5 | <h1>{{titl}}</h1>
       |
    ```

"""

from __future__ import annotations

from dataclasses import dataclass
from difflib import get_close_matches
from enum import Enum

# ---------------------------------------------------------------------------
# Error codes
# ---------------------------------------------------------------------------


class ErrorCode(Enum):
    """Classification of template errors.

    The first group is raised by the parser (``ParseError.code``), the
    second group at render or load time.
    """

    # Compile time
    UNMATCHED_OPEN_TAG = "unmatched_open_tag"
    EMPTY_TAG = "empty_tag"
    SECTION_NO_CLOSING_TAG = "section_no_closing_tag"
    INTERLEAVED_CLOSING_TAG = "interleaved_closing_tag"
    INVALID_META_TAG = "invalid_meta_tag"
    UNMATCHED_CLOSE_TAG = "unmatched_close_tag"
    INVALID_VARIABLE = "invalid_variable"

    # Render time / loading
    MISSING_VARIABLE = "missing_variable"
    RUNTIME_ERROR = "runtime_error"
    TEMPLATE_NOT_FOUND = "template_not_found"
    PARTIAL_DEPTH = "partial_depth"

    @property
    def category(self) -> str:
        """Error category: ``'parser'``, ``'runtime'`` or ``'loader'``."""
        return _CATEGORIES.get(self, "parser")


_CATEGORIES = {
    ErrorCode.MISSING_VARIABLE: "runtime",
    ErrorCode.RUNTIME_ERROR: "runtime",
    ErrorCode.PARTIAL_DEPTH: "runtime",
    ErrorCode.TEMPLATE_NOT_FOUND: "loader",
}


# ---------------------------------------------------------------------------
# Message helpers
# ---------------------------------------------------------------------------


def _location(name: str | None, lineno: int | None) -> str:
    """``name:line``, with ``<template>`` standing in for a missing name."""
    where = name or "<template>"
    return f"{where}:{lineno}" if lineno else where


def _suggest(name: str, candidates: frozenset[str] | None) -> str:
    if not candidates:
        return ""
    close = get_close_matches(name, candidates, n=1, cutoff=0.6)
    return f". Did you mean '{close[0]}'?" if close else ""


def format_template_stack(stack: list[tuple[str, int]] | None) -> str:
    """Render the partial inclusion chain, outermost first.

    Example:
        >>> print(format_template_stack([("page", 4), ("nav", 2)]))
        Template stack:
          • page:4
          • nav:2
    """
    if not stack:
        return ""
    entries = (f"  • {name}:{line}" for name, line in stack)
    return "\n".join(["Template stack:", *entries])


@dataclass(frozen=True, slots=True)
class SourceSnippet:
    """A few numbered source lines, one of them marked as the error line."""

    lines: tuple[tuple[int, str], ...]
    error_line: int

    def format(self) -> str:
        """Gutter-style rendering with ``>`` on the error line."""
        body = [
            f"{'>' if number == self.error_line else ' '}{number:>3} | {text}"
            for number, text in self.lines
        ]
        return "\n".join(["   |", *body, "   |"])


def build_source_snippet(
    source: str,
    error_line: int,
    *,
    context_lines: int = 1,
) -> SourceSnippet:
    """Cut ``context_lines`` lines either side of ``error_line`` (1-based)."""
    numbered = list(enumerate(source.splitlines(), start=1))
    first = max(1, error_line - context_lines)
    last = error_line + context_lines
    window = tuple((n, text) for n, text in numbered if first <= n <= last)
    return SourceSnippet(lines=window, error_line=error_line)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class TemplateError(Exception):
    """Base exception for all stache template errors.

        >>> try:
        ...     template.render(data)
        ... except TemplateError as e:
        ...     log.error(e.format_compact())

    Attributes:
        code: ErrorCode classifying the failure, when there is one.
    """

    code: ErrorCode | None = None

    def format_compact(self) -> str:
        """One-line-first summary prefixed with the error code."""
        text = str(self)
        if self.code is None or self.code.value in text:
            return text
        return f"{self.code.value}: {text}"


class TemplateNotFoundError(TemplateError):
    """Template or partial not found by any configured loader."""

    code = ErrorCode.TEMPLATE_NOT_FOUND


class TemplateSyntaxError(TemplateError):
    """Compile-time error in template source.

    ``format_compact()`` adds the location and, when ``source`` is known,
    a snippet around ``lineno``.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        name: str | None = None,
        source: str | None = None,
    ):
        self.message = message
        self.lineno = lineno
        self.name = name
        self.source = source
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        return self.message

    def format_compact(self) -> str:
        prefix = f"{self.code.value}: " if self.code else ""
        out = [f"{prefix}{self.message}", f"  --> {_location(self.name, self.lineno)}"]
        if self.source and self.lineno:
            out.append(build_source_snippet(self.source, self.lineno).format())
        return "\n".join(out)


class TemplateRuntimeError(TemplateError):
    """Render-time error with debugging context.

    Output Format:
            ```
            Runtime Error: lambda 'wrapped' must accept (text, render)
              Location: page.mustache:12
              Expression: {{#wrapped}}
              Suggestion: Define it as: def wrapped(text, render): ...
            ```

    Attributes:
        message: What went wrong
        expression: Tag or path expression being evaluated
        template_name, lineno: Where it happened
        suggestion: How to fix it
        template_stack: (template_name, line) pairs of the partial chain
    """

    code: ErrorCode | None = ErrorCode.RUNTIME_ERROR

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        template_name: str | None = None,
        lineno: int | None = None,
        suggestion: str | None = None,
        template_stack: list[tuple[str, int]] | None = None,
    ):
        self.message = message
        self.expression = expression
        self.template_name = template_name
        self.lineno = lineno
        self.suggestion = suggestion
        self.template_stack = template_stack or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        out = [f"Runtime Error: {self.message}"]
        if self.template_name or self.lineno:
            out.append(f"  Location: {_location(self.template_name, self.lineno)}")
        if self.template_stack:
            out.append(format_template_stack(self.template_stack))
        if self.expression:
            out.append(f"  Expression: {self.expression}")
        if self.suggestion:
            out.append(f"  Suggestion: {self.suggestion}")
        return "\n".join(out)


class InvalidVariableError(TemplateRuntimeError):
    """A path expression is malformed or applied to the wrong kind of value.

    Raised for a dot segment starting with a digit, an index into something
    that is neither a mapping nor a sequence, a missing mapping key, an
    out-of-range or non-integer sequence index, and a call to a name with no
    callable of matching arity.
    """

    code = ErrorCode.INVALID_VARIABLE

    def __init__(self, name: str, reason: str | None = None, **kwargs):
        self.name = name
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"invalid variable {name!r}{detail}", expression=name, **kwargs)


class PartialDepthError(TemplateRuntimeError):
    """Partial (or lambda re-render) nesting went past the configured limit."""

    code = ErrorCode.PARTIAL_DEPTH


class MissingVariableError(TemplateError):
    """A name was not found on any context of the stack.

    Swallowed (rendered as empty output) unless the environment is strict.
    Section names never raise it. ``available_names`` feeds the "Did you
    mean" hint.
    """

    code = ErrorCode.MISSING_VARIABLE

    def __init__(
        self,
        name: str,
        template: str | None = None,
        lineno: int | None = None,
        available_names: frozenset[str] | None = None,
        source_snippet: SourceSnippet | None = None,
    ):
        self.name = name
        self.template = template
        self.lineno = lineno
        self.available_names = available_names or frozenset()
        self.source_snippet = source_snippet

        msg = f"missing variable {name!r}"
        if template or lineno:
            msg += f" in {_location(template, lineno)}"
        msg += _suggest(name, available_names)
        if source_snippet:
            msg += "\n" + source_snippet.format()
        super().__init__(msg)
