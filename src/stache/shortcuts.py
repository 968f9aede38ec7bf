"""One-call helpers that build an Environment for you.

Each helper creates a fresh ``Environment`` per call, so nothing is shared
between calls. Partials referenced by a string template are looked up in
the current directory unless a loader is given; those referenced by a file
template are looked up next to the file.

Example:
    >>> from stache import render
    >>> render("Hello {{name}}", {"name": "World"})
    'Hello World'

    >>> render_file("templates/page.mustache", page, site)

Contexts are positional: the first one is searched first. Keyword-only
arguments configure the environment.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

from stache.environment import Environment, FileSystemLoader, Loader
from stache.template import Template


def _environment(
    loader: Loader | None,
    force_raw: bool,
    formatter: Callable[[Any], str] | None,
) -> Environment:
    return Environment(
        loader=loader if loader is not None else FileSystemLoader("."),
        force_raw=force_raw,
        formatter=formatter,
    )


def parse_string(
    source: str,
    *,
    loader: Loader | None = None,
    force_raw: bool = False,
    formatter: Callable[[Any], str] | None = None,
) -> Template:
    """Compile ``source``. Partials come from ``loader`` (default: the cwd)."""
    return _environment(loader, force_raw, formatter).from_string(source)


def parse_file(
    path: str | Path,
    *,
    loader: Loader | None = None,
    force_raw: bool = False,
    formatter: Callable[[Any], str] | None = None,
) -> Template:
    """Compile the template at ``path``.

    Partials come from ``loader``, defaulting to the file's directory.

    Raises:
        OSError: The file cannot be read
    """
    path = Path(path)
    if loader is None:
        loader = FileSystemLoader(path.parent)
    env = _environment(loader, force_raw, formatter)
    source = path.read_text(encoding="utf-8")
    root = env.parse(source, path.name)
    return Template(env, root, name=path.name, filename=str(path), source=source)


def render(
    source: str,
    *contexts: Any,
    loader: Loader | None = None,
    force_raw: bool = False,
    formatter: Callable[[Any], str] | None = None,
) -> str:
    """Compile and render ``source`` against ``contexts``."""
    template = parse_string(source, loader=loader, force_raw=force_raw, formatter=formatter)
    return template.render(*contexts)


def render_in_layout(
    source: str,
    layout_source: str,
    *contexts: Any,
    loader: Loader | None = None,
) -> str:
    """Render ``source``, then ``layout_source`` around it as ``{{{content}}}``.

    Example:
        >>> render_in_layout("Hi {{name}}", "<p>{{{content}}}</p>", {"name": "Ada"})
        '<p>Hi Ada</p>'
    """
    template = parse_string(source, loader=loader)
    layout = parse_string(layout_source, loader=loader)
    return template.render_in_layout(layout, *contexts)


def render_file(
    path: str | Path,
    *contexts: Any,
    loader: Loader | None = None,
    force_raw: bool = False,
    formatter: Callable[[Any], str] | None = None,
) -> str:
    """Compile and render the template at ``path``."""
    template = parse_file(path, loader=loader, force_raw=force_raw, formatter=formatter)
    return template.render(*contexts)


def render_file_in_layout(
    path: str | Path,
    layout_path: str | Path,
    *contexts: Any,
    loader: Loader | None = None,
) -> str:
    """Render the file at ``path`` inside the layout file at ``layout_path``."""
    template = parse_file(path, loader=loader)
    layout = parse_file(layout_path, loader=loader)
    return template.render_in_layout(layout, *contexts)
