"""Tests for Environment configuration, Template objects and shortcuts."""

import pytest

import stache
from stache import (
    DictLoader,
    Environment,
    FileSystemLoader,
    Template,
    TemplateNotFoundError,
)


class TestConfiguration:
    """Environment validation and defaults."""

    def test_defaults(self):
        env = Environment()
        assert env.loader is None
        assert env.strict is False
        assert env.force_raw is False
        assert (env.open_tag, env.close_tag) == ("{{", "}}")
        assert env.max_partial_depth == 50

    @pytest.mark.parametrize("kwargs", [{"open_tag": ""}, {"close_tag": ""}])
    def test_empty_delimiters_rejected(self, kwargs):
        with pytest.raises(ValueError, match="must be non-empty"):
            Environment(**kwargs)

    def test_negative_depth_rejected(self):
        with pytest.raises(ValueError, match="max_partial_depth"):
            Environment(max_partial_depth=-1)

    def test_formatter_implies_force_raw(self):
        assert Environment(formatter=str).force_raw is True

    def test_custom_delimiters(self):
        env = Environment(open_tag="<%", close_tag="%>")
        template = env.from_string("<% name %> {{name}}")
        assert template.render(name="x") == "x {{name}}"
        assert template.open_tag == "<%"


class TestTemplates:
    """Loading and template attributes."""

    def test_get_template(self):
        env = Environment(loader=DictLoader({"page": "<p>{{body}}</p>"}))
        template = env.get_template("page")
        assert isinstance(template, Template)
        assert template.name == "page"
        assert template.source == "<p>{{body}}</p>"
        assert template.environment is env
        assert template.render(body="hi") == "<p>hi</p>"

    def test_get_template_uses_env_delimiters(self):
        env = Environment(loader=DictLoader({"p": "[[x]]"}), open_tag="[[", close_tag="]]")
        assert env.get_template("p").render(x=1) == "1"

    def test_get_template_filename(self, tmp_path):
        (tmp_path / "page.mustache").write_text("{{a}}")
        env = Environment(loader=FileSystemLoader(tmp_path))
        template = env.get_template("page")
        assert template.filename == str(tmp_path / "page.mustache")

    def test_get_template_without_loader(self):
        with pytest.raises(TemplateNotFoundError):
            Environment().get_template("page")

    def test_from_string_name(self, env):
        assert env.from_string("x", name="inline").name == "inline"
        assert env.from_string("x").name is None

    def test_repr(self, env):
        assert repr(env.from_string("x", name="page")) == "<Template page>"
        assert repr(env.from_string("x")) == "<Template (inline)>"

    def test_render_string(self, env):
        assert env.render_string("{{a}} & {{{b}}}", a="<x>", b="<y>") == "&lt;x&gt; & <y>"

    def test_template_reusable(self, env):
        template = env.from_string("{{n}}")
        assert [template.render(n=i) for i in range(3)] == ["0", "1", "2"]

    def test_get_partial_indents_non_empty_lines(self):
        env = Environment(loader=DictLoader({"p": "a\n\nb\n"}))
        assert env.get_partial("p", indent="  ").source == "  a\n\n  b\n"


class TestShortcuts:
    """Module-level helpers."""

    def test_render(self):
        assert stache.render("{{#xs}}{{.}},{{/xs}}", {"xs": [1, 2, 3]}) == "1,2,3,"

    def test_render_options(self):
        assert stache.render("{{x}}", {"x": "<b>"}, force_raw=True) == "<b>"
        assert stache.render("{{x}}", {"x": 1}, formatter=lambda v: f"<{v}>") == "<1>"

    def test_parse_string_with_loader(self):
        template = stache.parse_string("{{>p}}", loader=DictLoader({"p": "P{{a}}"}))
        assert template.render({"a": 1}) == "P1"

    def test_render_in_layout(self):
        out = stache.render_in_layout("Hi {{name}}", "<p>{{{content}}}</p>", {"name": "Ada"})
        assert out == "<p>Hi Ada</p>"

    def test_render_file_uses_its_directory_for_partials(self, tmp_path):
        (tmp_path / "page.mustache").write_text("{{>header}}body")
        (tmp_path / "header.mustache").write_text("<h1>{{title}}</h1>")
        out = stache.render_file(tmp_path / "page.mustache", {"title": "T"})
        assert out == "<h1>T</h1>body"

    def test_parse_file(self, tmp_path):
        path = tmp_path / "page.mustache"
        path.write_text("{{a}}")
        template = stache.parse_file(str(path))
        assert template.name == "page.mustache"
        assert template.filename == str(path)

    def test_parse_file_missing(self, tmp_path):
        with pytest.raises(OSError):
            stache.parse_file(tmp_path / "nope.mustache")

    def test_render_file_in_layout(self, tmp_path):
        (tmp_path / "page.mustache").write_text("{{title}}")
        (tmp_path / "layout.mustache").write_text("<main>{{{content}}}</main>")
        out = stache.render_file_in_layout(
            tmp_path / "page.mustache", tmp_path / "layout.mustache", {"title": "T"}
        )
        assert out == "<main>T</main>"
