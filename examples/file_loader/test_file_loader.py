"""Tests for the file-loader example."""


class TestFileLoaderApp:
    """Verify file-based template loading with partials."""

    def test_home_has_title(self, example_app) -> None:
        assert "<title>Welcome | My Site</title>" in example_app.home_output

    def test_home_has_content(self, example_app) -> None:
        assert "<h1>Welcome</h1>" in example_app.home_output
        assert "stache-powered site" in example_app.home_output

    def test_about_has_title(self, example_app) -> None:
        assert "<title>About Us | My Site</title>" in example_app.about_output

    def test_about_has_content(self, example_app) -> None:
        assert "<h1>About Us</h1>" in example_app.about_output
        assert "plain Python data" in example_app.about_output

    def test_nav_included_in_both(self, example_app) -> None:
        for output in [example_app.home_output, example_app.about_output]:
            assert "<nav>\n" in output
            assert '  <a href="/">Home</a>\n' in output
            assert '  <a href="/about">About</a>\n' in output

    def test_footer_from_stache_extension(self, example_app) -> None:
        for output in [example_app.home_output, example_app.about_output]:
            assert output.endswith("<footer>Powered by stache</footer>\n</body>\n</html>\n")

    def test_template_filename(self, example_app) -> None:
        assert example_app.home_template.filename.endswith("home.mustache")
