"""Parser error handling for stache.

Provides ParseError, the classified compile-time failure.
"""

from __future__ import annotations

from stache.environment.exceptions import ErrorCode, TemplateSyntaxError

_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.UNMATCHED_OPEN_TAG: "unmatched open tag",
    ErrorCode.EMPTY_TAG: "empty tag",
    ErrorCode.SECTION_NO_CLOSING_TAG: "Section {reason} has no closing tag",
    ErrorCode.INTERLEAVED_CLOSING_TAG: "interleaved closing tag: {reason}",
    ErrorCode.INVALID_META_TAG: "Invalid meta tag",
    ErrorCode.UNMATCHED_CLOSE_TAG: "unmatched close tag",
    ErrorCode.INVALID_VARIABLE: "invalid variable {reason}",
}


class ParseError(TemplateSyntaxError):
    """Compile-time error with a 1-based line and a classification.

    Attributes:
        line: Line where the error was detected (for an unclosed section,
            the line that opened it).
        code: The ErrorCode classifying the failure.
        reason: Name of the offending element, when there is one.

    Example:
        >>> raise ParseError(3, ErrorCode.SECTION_NO_CLOSING_TAG, "items")
        ParseError: line 3: Section items has no closing tag
    """

    def __init__(
        self,
        line: int,
        code: ErrorCode,
        reason: str = "",
        *,
        name: str | None = None,
        source: str | None = None,
    ):
        self.line = line
        self.code = code
        self.reason = reason
        message = _MESSAGES.get(code, "unknown error").format(reason=reason).rstrip()
        super().__init__(message, lineno=line, name=name, source=source)

    def _format_message(self) -> str:
        return f"line {self.line}: {self.message}"
