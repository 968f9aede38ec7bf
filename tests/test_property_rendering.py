"""Property-based tests for the parser and renderer.

Uses hypothesis to check invariants over generated inputs:

- Text without tags renders unchanged
- Well-formed templates always parse and render
- A re-serialized template renders like the original
- Exactly one of a section and its inverse renders
- Arbitrary input never causes an unhandled crash
"""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from stache import Environment, TemplateError
from stache.template import body_source

from .strategies import (
    arbitrary_template_source,
    plain_text,
    safe_identifier,
    scalar_value,
    template_context,
    template_source,
)

_env = Environment()


class TestRenderProperties:
    """Renderer invariants."""

    @given(source=plain_text)
    @settings(max_examples=200)
    def test_plain_text_unchanged(self, source: str) -> None:
        """Text with no tags renders as itself."""
        assert _env.render_string(source) == source

    @given(source=template_source, context=template_context)
    @settings(max_examples=200)
    def test_well_formed_templates_render(self, source: str, context: dict) -> None:
        """Generated templates parse and render against any scalar context."""
        assert isinstance(_env.render_string(source, context), str)

    @given(source=template_source, context=template_context)
    @settings(max_examples=200)
    def test_body_source_renders_the_same(self, source: str, context: dict) -> None:
        """Re-serialized templates render exactly like the original."""
        body = _env.parse(source).body
        assert _env.render_string(body_source(body), context) == _env.render_string(
            source, context
        )

    @given(name=safe_identifier, value=scalar_value)
    def test_section_and_inverse_exclusive(self, name: str, value: object) -> None:
        """Exactly one of {{#x}} and {{^x}} renders its body."""
        source = f"{{{{#{name}}}}}1{{{{/{name}}}}}{{{{^{name}}}}}0{{{{/{name}}}}}"
        assert _env.render_string(source, {name: value}) in ("0", "1")

    @given(items=st.lists(st.integers(), max_size=10))
    def test_list_section_renders_once_per_item(self, items: list[int]) -> None:
        """A list section renders its body once per element, in order."""
        out = _env.render_string("{{#xs}}{{.}};{{/xs}}", xs=items)
        assert out == "".join(f"{i};" for i in items)


class TestParserProperties:
    """Parser robustness."""

    @given(source=arbitrary_template_source)
    @settings(max_examples=300)
    def test_no_unhandled_crash(self, source: str) -> None:
        """Arbitrary input either renders or raises a TemplateError."""
        try:
            _env.render_string(source)
        except TemplateError:
            pass  # Expected for malformed input
