"""Tests for the dict_loader example."""


class TestDictLoaderApp:
    """Verify the dict_loader example renders correctly."""

    def test_output_contains_expected_content(self, example_app) -> None:
        assert "In-Memory Partials" in example_app.output
        assert "No filesystem required" in example_app.output
        assert "<title>DictLoader Demo</title>" in example_app.output

    def test_nav_items_rendered(self, example_app) -> None:
        assert '    <a href="/">Home</a>\n' in example_app.output
        assert '    <a href="/about">About</a>\n' in example_app.output

    def test_partials_are_indented(self, example_app) -> None:
        assert "  <nav>\n" in example_app.output
        assert '    <div class="card">\n' in example_app.output
        assert "      <h2>In-Memory Partials</h2>\n" in example_app.output
