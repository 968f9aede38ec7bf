"""Template parser: source text → element tree."""

from stache.parser.core import (
    DEFAULT_CLOSE_TAG,
    DEFAULT_OPEN_TAG,
    STANDALONE_SIGILS,
    Parser,
    parse,
)
from stache.parser.errors import ParseError

__all__ = [
    "DEFAULT_CLOSE_TAG",
    "DEFAULT_OPEN_TAG",
    "STANDALONE_SIGILS",
    "ParseError",
    "Parser",
    "parse",
]
