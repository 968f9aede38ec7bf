"""Tests for the template introspection example."""


class TestIntrospectionApp:
    """Verify the introspection API describes the template."""

    def test_tags_in_source_order(self, example_app) -> None:
        assert example_app.tags == [
            ("VARIABLE", "page.title"),
            ("INVERTED_SECTION", "page.published"),
            ("SECTION", "page.tags"),
            ("PARTIAL", "footer"),
            ("VARIABLE", "site_name"),
        ]

    def test_section_tags(self, example_app) -> None:
        assert example_app.section_tags == [("VARIABLE", ".")]

    def test_partials(self, example_app) -> None:
        assert example_app.partials == frozenset({"footer"})

    def test_required_context_has_expected_vars(self, example_app) -> None:
        assert example_app.required == frozenset({"page", "site_name"})

    def test_validate_context_detects_missing(self, example_app) -> None:
        assert example_app.missing_vars == ["site_name"]

    def test_validate_context_passes_complete(self, example_app) -> None:
        assert example_app.no_missing == []

    def test_output_is_populated(self, example_app) -> None:
        assert "Required context" in example_app.output
        assert "Partials: ['footer']" in example_app.output
