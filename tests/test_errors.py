"""Tests for the error catalog and error message formatting."""

import pytest

from stache import (
    ErrorCode,
    InvalidVariableError,
    MissingVariableError,
    PartialDepthError,
    TemplateError,
    TemplateRuntimeError,
    build_source_snippet,
)
from stache.environment.exceptions import format_template_stack


class TestErrorCode:
    """ErrorCode classification."""

    @pytest.mark.parametrize(
        ("code", "category"),
        [
            (ErrorCode.UNMATCHED_OPEN_TAG, "parser"),
            (ErrorCode.INVALID_VARIABLE, "parser"),
            (ErrorCode.MISSING_VARIABLE, "runtime"),
            (ErrorCode.PARTIAL_DEPTH, "runtime"),
            (ErrorCode.TEMPLATE_NOT_FOUND, "loader"),
        ],
    )
    def test_category(self, code, category):
        assert code.category == category


class TestMissingVariableError:
    """Missing variable messages."""

    def test_plain_message(self):
        err = MissingVariableError("title")
        assert str(err) == "missing variable 'title'"
        assert err.code is ErrorCode.MISSING_VARIABLE

    def test_location(self):
        err = MissingVariableError("title", template="page", lineno=4)
        assert str(err) == "missing variable 'title' in page:4"

    def test_did_you_mean(self):
        err = MissingVariableError("titl", available_names=frozenset({"title", "body"}))
        assert "Did you mean 'title'?" in str(err)

    def test_no_suggestion_for_unrelated_names(self):
        err = MissingVariableError("xyz", available_names=frozenset({"title"}))
        assert "Did you mean" not in str(err)

    def test_snippet(self):
        snippet = build_source_snippet("a\n{{titl}}\nc", 2)
        err = MissingVariableError("titl", source_snippet=snippet)
        assert ">  2 | {{titl}}" in str(err)

    def test_format_compact_prefixes_code(self):
        assert MissingVariableError("x").format_compact() == (
            "missing_variable: missing variable 'x'"
        )


class TestRuntimeErrors:
    """Render-time error formatting."""

    def test_runtime_error_fields(self):
        err = TemplateRuntimeError(
            "boom",
            expression="{{#wrap}}",
            template_name="page",
            lineno=3,
            suggestion="fix it",
        )
        text = str(err)
        assert text.startswith("Runtime Error: boom")
        assert "Location: page:3" in text
        assert "Expression: {{#wrap}}" in text
        assert "Suggestion: fix it" in text

    def test_invalid_variable_is_runtime_error(self):
        err = InvalidVariableError("xs[9]", "index 9 out of range")
        assert isinstance(err, TemplateRuntimeError)
        assert err.name == "xs[9]"
        assert err.code is ErrorCode.INVALID_VARIABLE
        assert "invalid variable 'xs[9]': index 9 out of range" in str(err)

    def test_partial_depth_error(self):
        err = PartialDepthError("too deep", template_stack=[("page", 2), ("nav", 1)])
        assert isinstance(err, TemplateError)
        assert err.code is ErrorCode.PARTIAL_DEPTH
        assert "page:2" in str(err)

    def test_template_stack_format(self):
        assert format_template_stack([("page", 4), ("nav", 2)]) == (
            "Template stack:\n  • page:4\n  • nav:2"
        )
        assert format_template_stack([]) == ""


class TestSourceSnippet:
    """Source snippets around an error line."""

    def test_context_lines(self):
        snippet = build_source_snippet("1\n2\n3\n4\n5", 3)
        assert [n for n, _ in snippet.lines] == [2, 3, 4]

    def test_first_line(self):
        snippet = build_source_snippet("only", 1)
        assert snippet.format() == "   |\n>  1 | only\n   |"
