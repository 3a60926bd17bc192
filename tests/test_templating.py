"""Tests for waypost.templating — kida templates as render handlers."""

import pytest

from waypost.nodes import RouteNode
from waypost.scope import RouterScope
from waypost.templating import create_environment, template_handler

TEMPLATES = {
    "shell.html": '<main class="modal">{{ outlet() }}</main>',
    "index.html": "<p>{{ title }}</p>",
    "editor.html": '<form data-mode="{{ params["mode"] }}">{{ params["id"] }}</form>',
    "panel.html": "<section>{{ outlet(title=\"nested\") }}</section>",
    "unsafe.html": "<p>{{ note }}</p>",
}


@pytest.fixture
def scope() -> RouterScope:
    env = create_environment(templates=TEMPLATES)
    scope = RouterScope("resources")
    scope.attach(
        RouteNode(
            "/",
            template_handler(env, "shell.html"),
            RouteNode("/", template_handler(env, "index.html", title="Resources")),
            RouteNode("/templates/:mode(edit|view)/:id?", template_handler(env, "editor.html")),
            RouteNode(
                "/panel",
                template_handler(env, "panel.html"),
                RouteNode("/inner", template_handler(env, "index.html")),
            ),
        )
    )
    return scope


class TestTemplateHandlers:
    def test_layout_wraps_index(self, scope: RouterScope) -> None:
        html = scope.render()
        assert html == '<main class="modal"><p>Resources</p></main>'

    def test_params_in_template(self, scope: RouterScope) -> None:
        scope.navigate("/templates/edit/42")
        assert scope.render() == '<main class="modal"><form data-mode="edit">42</form></main>'

    def test_outlet_props_reach_next_level(self, scope: RouterScope) -> None:
        scope.navigate("/panel/inner")
        html = scope.render()
        assert "<section><p>nested</p></section>" in html

    def test_leaf_outlet_is_empty(self, scope: RouterScope) -> None:
        scope.navigate("/panel")
        assert scope.render() == '<main class="modal"><section></section></main>'

    def test_render_props_autoescaped(self) -> None:
        env = create_environment(templates=TEMPLATES)
        scope = RouterScope("main")
        scope.attach(RouteNode("/", template_handler(env, "unsafe.html")))
        assert scope.render(note="<b>") == "<p>&lt;b&gt;</p>"

    def test_handler_name(self) -> None:
        env = create_environment(templates=TEMPLATES)
        assert template_handler(env, "shell.html").__name__ == "template:shell.html"


class TestCreateEnvironment:
    def test_requires_a_source(self) -> None:
        with pytest.raises(ValueError, match="template_dir or in-memory templates"):
            create_environment()

    def test_template_dir(self, tmp_path) -> None:
        (tmp_path / "page.html").write_text("<h1>{{ heading }}</h1>")
        env = create_environment(tmp_path)
        scope = RouterScope("main")
        scope.attach(RouteNode("/", template_handler(env, "page.html", heading="Home")))
        assert scope.render() == "<h1>Home</h1>"

    def test_globals(self) -> None:
        env = create_environment(
            templates={"g.html": "{{ app_name }}"}, globals_={"app_name": "Carcosa"}
        )
        scope = RouterScope("main")
        scope.attach(RouteNode("/", template_handler(env, "g.html")))
        assert scope.render() == "Carcosa"
