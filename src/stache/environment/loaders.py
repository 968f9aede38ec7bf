"""Partial loaders for the stache environment.

A loader turns a partial name into template source. ``{{>name}}`` tags and
``Environment.get_template()`` both go through ``get_source(name)``, which
returns ``(source, filename)`` and raises ``TemplateNotFoundError``.

Built-in loaders:
- `FileSystemLoader`: directories searched in order, trying each extension
- `DictLoader`: in-memory mapping (tests, embedded templates)
- `ChoiceLoader`: first loader that has the name wins
- `FunctionLoader`: any callable

Anything with a matching ``get_source`` works as a loader:
    ```python
    class RedisLoader:
        def get_source(self, name: str) -> tuple[str, str | None]:
            source = redis.get(f"partials:{name}")
            if source is None:
                raise TemplateNotFoundError(f"Partial '{name}' not found")
            return source.decode(), f"redis://partials:{name}"
    ```

Loaders are called from every render that includes a partial, possibly
from several threads at once. The built-in ones keep no mutable state.

"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from difflib import get_close_matches
from pathlib import Path
from typing import Protocol

from stache.environment.exceptions import TemplateNotFoundError

DEFAULT_EXTENSIONS = ("", ".mustache", ".stache")

# Names listed in a not-found message before it is cut short
_LISTED_NAMES = 10


class Loader(Protocol):
    def get_source(self, name: str) -> tuple[str, str | None]: ...


def _not_found(name: str, known: Iterable[str], detail: str = "") -> TemplateNotFoundError:
    """Build the error for a missing partial, hinting at close or known names."""
    known = sorted(known)
    msg = f"Partial '{name}' not found{detail}"
    close = get_close_matches(name, known, n=1, cutoff=0.6)
    if close:
        msg += f". Did you mean '{close[0]}'?"
    elif known:
        msg += f". Available: {', '.join(known[:_LISTED_NAMES])}"
        if len(known) > _LISTED_NAMES:
            msg += f" ... ({len(known)} total)"
    return TemplateNotFoundError(msg)


class FileSystemLoader:
    """Load partials from one or more directories.

    ``name + extension`` is tried for every extension in every directory,
    directories first:

        ```python
        loader = FileSystemLoader(["partials/", "shared/"])
        loader.get_source("header")
        # partials/header, partials/header.mustache, partials/header.stache,
        # shared/header, shared/header.mustache, shared/header.stache
        ```

    Names may contain ``/`` to reach subdirectories.

    Example:
            >>> source, filename = FileSystemLoader("templates/").get_source("user")
            >>> filename
            'templates/user.mustache'
    """

    __slots__ = ("_encoding", "_extensions", "_paths")

    def __init__(
        self,
        paths: str | Path | Sequence[str | Path],
        extensions: Sequence[str] = DEFAULT_EXTENSIONS,
        encoding: str = "utf-8",
    ):
        roots = [paths] if isinstance(paths, (str, Path)) else paths
        self._paths = [Path(root) for root in roots]
        self._extensions = tuple(extensions)
        self._encoding = encoding

    @property
    def paths(self) -> list[Path]:
        return list(self._paths)

    def _candidates(self, name: str) -> Iterator[Path]:
        for root in self._paths:
            for ext in self._extensions:
                yield root / f"{name}{ext}"

    def get_source(self, name: str) -> tuple[str, str]:
        found = next((path for path in self._candidates(name) if path.is_file()), None)
        if found is None:
            searched = ", ".join(str(root) for root in self._paths)
            tried = ", ".join(repr(ext) for ext in self._extensions)
            raise _not_found(
                name,
                self.list_templates(),
                f" in: {searched} (extensions tried: {tried})",
            )
        return found.read_text(self._encoding), str(found)

    def list_templates(self) -> list[str]:
        """Names (without extension) of files carrying a known extension."""
        suffixes = {ext for ext in self._extensions if ext}
        names = {
            path.relative_to(root).with_suffix("").as_posix()
            for root in self._paths
            if root.is_dir()
            for path in root.rglob("*")
            if path.suffix in suffixes and path.is_file()
        }
        return sorted(names)


class DictLoader:
    """Load partials from an in-memory ``{name: source}`` mapping.

    Example:
            >>> env = Environment(loader=DictLoader({"user": "<b>{{name}}</b>"}))
            >>> env.from_string("{{#users}}{{>user}}{{/users}}").render(
            ...     users=[{"name": "Ada"}, {"name": "Bob"}]
            ... )
            '<b>Ada</b><b>Bob</b>'
    """

    __slots__ = ("_mapping",)

    def __init__(self, mapping: Mapping[str, str]):
        self._mapping = mapping

    def get_source(self, name: str) -> tuple[str, None]:
        try:
            return self._mapping[name], None
        except KeyError:
            raise _not_found(name, self._mapping) from None

    def list_templates(self) -> list[str]:
        return sorted(self._mapping)


class ChoiceLoader:
    """Ask several loaders in turn; the first one that has the name wins.

    Example:
            >>> loader = ChoiceLoader([
            ...     DictLoader({"footer": "custom footer"}),
            ...     FileSystemLoader("partials/"),
            ... ])
    """

    __slots__ = ("_loaders",)

    def __init__(self, loaders: Sequence[Loader]):
        self._loaders = list(loaders)

    def get_source(self, name: str) -> tuple[str, str | None]:
        for loader in self._loaders:
            try:
                return loader.get_source(name)
            except TemplateNotFoundError:
                pass
        raise TemplateNotFoundError(
            f"Partial '{name}' not found in any of {len(self._loaders)} loaders"
        )

    def list_templates(self) -> list[str]:
        names: set[str] = set()
        for loader in self._loaders:
            list_templates = getattr(loader, "list_templates", None)
            if list_templates is not None:
                names.update(list_templates())
        return sorted(names)


class FunctionLoader:
    """Adapt a callable into a loader.

    The callable gets the partial name and returns the source, a
    ``(source, filename)`` pair, or ``None`` when it has no such partial.

    Example:
            >>> env = Environment(loader=FunctionLoader(cms.snippets.get))
    """

    __slots__ = ("_load",)

    def __init__(self, load: Callable[[str], str | tuple[str, str | None] | None]):
        self._load = load

    def get_source(self, name: str) -> tuple[str, str | None]:
        result = self._load(name)
        if result is None:
            raise TemplateNotFoundError(f"Partial '{name}' not found")
        return (result, None) if isinstance(result, str) else result
