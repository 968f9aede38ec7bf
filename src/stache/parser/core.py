"""Tokenizer and tree builder for Mustache template source.

The parser is a single forward pass over the source with a cursor and a
line counter. Each step reads the text up to the next open delimiter,
then the tag body up to the close delimiter, and dispatches on the tag's
first character. Sections recurse until their matching close tag.

Standalone tags:
    A block tag (``#^/<>=!``) that is the only non-whitespace content on
    its line takes its line with it: the indentation before it and the
    line break after it are dropped from the output. For a standalone
    partial, the dropped indentation becomes the partial's indent.

        A            A
        {{#x}}  →    B
        B
        {{/x}}

Thread-Safety:
    A Parser instance holds cursor state and must not be shared.
    The tree it returns is immutable.

"""

from __future__ import annotations

from dataclasses import dataclass

from stache.environment.exceptions import ErrorCode
from stache.nodes import Node, Partial, Section, TemplateNode, Text, Variable
from stache.parser.errors import ParseError

# Tag sigils eligible for standalone-line elision
STANDALONE_SIGILS = "#^/<>=!"

DEFAULT_OPEN_TAG = "{{"
DEFAULT_CLOSE_TAG = "}}"


@dataclass(frozen=True, slots=True)
class _TextRun:
    """Text read up to the next open delimiter.

    ``padding`` is the run of spaces/tabs directly before the tag when the
    tag could be standalone; it is split off ``text`` so the caller can drop
    or re-emit it.
    """

    text: str
    padding: str = ""
    may_standalone: bool = False
    eof: bool = False


class Parser:
    """Compile template source into a ``TemplateNode`` tree.

    Example:
        >>> root = Parser("Hello {{name}}!").parse()
        >>> [type(n).__name__ for n in root.body]
        ['Text', 'Variable', 'Text']

    Args:
        source: Template source text.
        open_tag: Initial open delimiter.
        close_tag: Initial close delimiter.
        force_raw: Make un-prefixed ``{{name}}`` variables raw (unescaped).
        name: Template name, for error messages.

    Raises:
        ParseError: On any syntax error. Parsing never returns a partial tree.
    """

    __slots__ = (
        "_close_tag",
        "_force_raw",
        "_line",
        "_name",
        "_open_tag",
        "_pos",
        "_source",
    )

    def __init__(
        self,
        source: str,
        *,
        open_tag: str = DEFAULT_OPEN_TAG,
        close_tag: str = DEFAULT_CLOSE_TAG,
        force_raw: bool = False,
        name: str | None = None,
    ):
        if not open_tag or not close_tag:
            raise ValueError("open_tag and close_tag must be non-empty")
        self._source = source
        self._open_tag = open_tag
        self._close_tag = close_tag
        self._force_raw = force_raw
        self._name = name
        self._pos = 0
        self._line = 1

    def parse(self) -> TemplateNode:
        """Parse the whole source."""
        body = self._parse_body(None, 0)
        return TemplateNode(
            lineno=1,
            body=tuple(body),
            open_tag=self._open_tag,
            close_tag=self._close_tag,
        )

    # -- scanning ----------------------------------------------------------

    def _read_until(self, marker: str) -> tuple[str, bool]:
        """Read up to and including ``marker``.

        Returns the text read and whether the marker was found. When it is
        not found, the rest of the source is returned and the cursor stays.
        """
        idx = self._source.find(marker, self._pos)
        if idx == -1:
            return self._source[self._pos :], False

        end = idx + len(marker)
        self._line += self._source.count("\n", self._pos, idx)
        text = self._source[self._pos : end]
        self._pos = end
        return text, True

    def _read_text(self) -> _TextRun:
        start = self._pos
        text, found = self._read_until(self._open_tag)
        if not found:
            return _TextRun(text, eof=True)

        tag_start = self._pos - len(self._open_tag)
        i = tag_start
        while i > start and self._source[i - 1] in " \t":
            i -= 1

        if i == 0 or self._source[i - 1] == "\n":
            return _TextRun(
                self._source[start:i],
                padding=self._source[i:tag_start],
                may_standalone=True,
            )
        return _TextRun(self._source[start:tag_start])

    def _read_tag(self, may_standalone: bool) -> tuple[str, bool]:
        """Read a tag body; return it stripped, plus whether it is standalone.

        A standalone tag also consumes the trailing line break.
        """
        tag_line = self._line
        if self._source.startswith("{", self._pos):
            terminator = "}" + self._close_tag
        else:
            terminator = self._close_tag

        text, found = self._read_until(terminator)
        if not found:
            raise self._error(tag_line, ErrorCode.UNMATCHED_OPEN_TAG)

        tag = text[: len(text) - len(self._close_tag)].strip()
        if not tag:
            raise self._error(tag_line, ErrorCode.EMPTY_TAG)

        if not may_standalone or tag[0] not in STANDALONE_SIGILS:
            return tag, False

        source = self._source
        eow = self._pos
        while eow < len(source) and source[eow] in " \t":
            eow += 1

        if eow == len(source):
            self._pos = eow
            return tag, True
        if source[eow] == "\n":
            self._pos = eow + 1
            self._line += 1
            return tag, True
        if source.startswith("\r\n", eow):
            self._pos = eow + 2
            self._line += 1
            return tag, True
        return tag, False

    # -- tree building -----------------------------------------------------

    def _parse_body(self, section_name: str | None, section_line: int) -> list[Node]:
        """Parse nodes until end of input, or the close tag of ``section_name``."""
        body: list[Node] = []

        while True:
            text_line = self._line
            run = self._read_text()

            if run.eof:
                if section_name is not None:
                    raise self._error(
                        section_line, ErrorCode.SECTION_NO_CLOSING_TAG, section_name
                    )
                if run.text:
                    body.append(Text(lineno=text_line, value=run.text))
                return body

            if run.text:
                body.append(Text(lineno=text_line, value=run.text))

            tag_line = self._line
            tag, standalone = self._read_tag(run.may_standalone)
            if not standalone and run.padding:
                body.append(Text(lineno=tag_line, value=run.padding))

            sigil = tag[0]
            if sigil == "!":
                continue

            if sigil in "#^":
                name = tag[1:].strip()
                children = self._parse_body(name, tag_line)
                body.append(
                    Section(
                        lineno=tag_line,
                        name=name,
                        inverted=sigil == "^",
                        body=tuple(children),
                    )
                )
            elif sigil == "/":
                name = tag[1:].strip()
                if section_name is None:
                    raise self._error(tag_line, ErrorCode.UNMATCHED_CLOSE_TAG, name)
                if name != section_name:
                    raise self._error(tag_line, ErrorCode.INTERLEAVED_CLOSING_TAG, name)
                return body
            elif sigil == ">":
                indent = run.padding if standalone else ""
                body.append(Partial(lineno=tag_line, name=tag[1:].strip(), indent=indent))
            elif sigil == "=":
                self._set_delimiters(tag, tag_line)
            elif sigil == "{":
                if not tag.endswith("}"):
                    raise self._error(tag_line, ErrorCode.INVALID_VARIABLE, tag)
                body.append(Variable(lineno=tag_line, name=tag[1:-1].strip(), raw=True))
            elif sigil == "&":
                body.append(Variable(lineno=tag_line, name=tag[1:].strip(), raw=True))
            else:
                body.append(Variable(lineno=tag_line, name=tag, raw=self._force_raw))

    def _set_delimiters(self, tag: str, line: int) -> None:
        """Apply ``{{=open close=}}``."""
        if len(tag) < 2 or not tag.endswith("="):
            raise self._error(line, ErrorCode.INVALID_META_TAG)
        parts = tag[1:-1].split()
        if len(parts) != 2:
            raise self._error(line, ErrorCode.INVALID_META_TAG)
        self._open_tag, self._close_tag = parts

    def _error(self, line: int, code: ErrorCode, reason: str = "") -> ParseError:
        return ParseError(line, code, reason, name=self._name, source=self._source)


def parse(
    source: str,
    *,
    open_tag: str = DEFAULT_OPEN_TAG,
    close_tag: str = DEFAULT_CLOSE_TAG,
    force_raw: bool = False,
    name: str | None = None,
) -> TemplateNode:
    """Parse ``source`` into an element tree. See ``Parser``."""
    return Parser(
        source,
        open_tag=open_tag,
        close_tag=close_tag,
        force_raw=force_raw,
        name=name,
    ).parse()
