"""Kida templates as render handlers.

Each template is one level of the layout chain. The next level renders
wherever the template calls ``{{ outlet() }}``::

    {# shell.html #}
    <main class="modal">{{ outlet() }}</main>

    {# editor.html #}
    <form data-mode="{{ params.mode }}">...</form>

Templates also see ``location`` (the match result), ``params``, and any
props passed to ``scope.render()`` or to ``outlet()`` by the level above.
"""

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from kida import ChoiceLoader, DictLoader, Environment, FileSystemLoader
from kida.template import Markup

from waypost.outlet import Outlet
from waypost.routing.match import RenderHandler


def create_environment(
    template_dir: str | Path | None = None,
    *,
    templates: Mapping[str, str] | None = None,
    autoescape: bool = True,
    globals_: Mapping[str, Any] | None = None,
) -> Environment:
    """Create a kida Environment for route templates.

    In-memory *templates* take precedence over files in *template_dir*.
    """
    loaders: list[Any] = []
    if templates:
        loaders.append(DictLoader(dict(templates)))
    if template_dir is not None:
        loaders.append(FileSystemLoader(str(template_dir)))
    if not loaders:
        msg = "create_environment() needs a template_dir or in-memory templates"
        raise ValueError(msg)

    env = Environment(
        loader=ChoiceLoader(loaders),
        autoescape=autoescape,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    for name, value in (globals_ or {}).items():
        env.add_global(name, value)
    return env


def _outlet_global(outlet: Outlet) -> Callable[..., Markup]:
    """Wrap *outlet* so templates can call it and embed the result."""

    def render_outlet(**props: Any) -> Markup:
        result = outlet(**props)
        if result is None:
            return Markup("")
        if isinstance(result, Markup):
            return result
        return Markup(str(result))

    return render_outlet


def template_handler(env: Environment, name: str, **defaults: Any) -> RenderHandler:
    """Return a render handler that renders template *name*.

    *defaults* are merged under the props passed at render time.
    """

    def handler(outlet: Outlet, **props: Any) -> Markup:
        template = env.get_template(name)
        context = {
            **defaults,
            **props,
            "outlet": _outlet_global(outlet),
            "location": outlet.location,
            "params": outlet.params,
        }
        return Markup(template.render(context))

    handler.__name__ = f"template:{name}"
    handler.__qualname__ = handler.__name__
    return handler
