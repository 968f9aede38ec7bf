"""Stache: Mustache templates for Python.

A logic-less template engine: ``{{tags}}`` in plain text, filled in from
whatever Python data you hand it (dicts, dataclasses, namedtuples, plain
objects, lists, callables).

Quickstart:
    >>> from stache import Environment
    >>> env = Environment()
    >>> template = env.from_string("Hello, {{name}}!")
    >>> template.render(name="World")
    'Hello, World!'

    >>> from stache import render
    >>> render("{{#items}}{{.}},{{/items}}", {"items": [1, 2, 3]})
    '1,2,3,'

Partials:
    >>> from stache import DictLoader
    >>> env = Environment(loader=DictLoader({"user": "<b>{{name}}</b>"}))
    >>> env.from_string("{{#users}}{{>user}}{{/users}}").render(users=[{"name": "Ada"}])
    '<b>Ada</b>'

Architecture:
Template Source → Parser → element tree → Renderer (+ context stack) → text

1. **Parser**: one forward pass; handles delimiter changes and standalone lines
2. **Element tree**: frozen dataclasses (Text, Variable, Section, Partial)
3. **Renderer**: walks the tree, resolving tag names against a stack of
   contexts, innermost first

Tag names are path expressions: ``user.name``, ``items[0]``,
``users[id].email``, ``format(price, 'EUR')``, and literals.

Missing Variables:
Unknown names render as empty text. Pass ``strict=True`` to raise
``MissingVariableError`` instead. Section names never raise.

Thread-Safety:
Templates are immutable; render them from as many threads as you like.

"""

from stache.environment import (
    ChoiceLoader,
    DictLoader,
    Environment,
    ErrorCode,
    FileSystemLoader,
    FunctionLoader,
    InvalidVariableError,
    Loader,
    MissingVariableError,
    PartialDepthError,
    SourceSnippet,
    TemplateError,
    TemplateNotFoundError,
    TemplateRuntimeError,
    TemplateSyntaxError,
    build_source_snippet,
)
from stache.nodes import TagType
from stache.parser import ParseError
from stache.render_context import RenderContext, get_render_context, render_context
from stache.shortcuts import (
    parse_file,
    parse_string,
    render,
    render_file,
    render_file_in_layout,
    render_in_layout,
)
from stache.template import Template
from stache.utils.html import html_escape, no_escape
from stache.values import MISSING, Lookup, ValueKind, is_empty, kind_of

__version__ = "0.1.0"

__all__ = [
    "MISSING",
    "ChoiceLoader",
    "DictLoader",
    "Environment",
    "ErrorCode",
    "FileSystemLoader",
    "FunctionLoader",
    "InvalidVariableError",
    "Loader",
    "Lookup",
    "MissingVariableError",
    "ParseError",
    "PartialDepthError",
    "RenderContext",
    "SourceSnippet",
    "TagType",
    "Template",
    "TemplateError",
    "TemplateNotFoundError",
    "TemplateRuntimeError",
    "TemplateSyntaxError",
    "ValueKind",
    "__version__",
    "build_source_snippet",
    "get_render_context",
    "html_escape",
    "is_empty",
    "kind_of",
    "no_escape",
    "parse_file",
    "parse_string",
    "render",
    "render_context",
    "render_file",
    "render_file_in_layout",
    "render_in_layout",
]
