"""Jinja2 helpers for building forms inside templates.

    {% set f = form_builder(article) %}
    {{ form_tag(article, f.label("title"), f.text_field("title"), anti_forgery_token=token) }}

With Litestar, pass ``configure_engine`` as the template config's
engine_callback.
"""

from __future__ import annotations

from typing import Any

import jinja2
from litestar.contrib.jinja import JinjaTemplateEngine
from markupsafe import Markup

from boundform.forms.core import FormRenderer, RenderOptions
from boundform.forms.fields import FieldBuilder
from boundform.forms.options import options_for_select
from boundform.forms.tags import hidden_field_tag


def register_helpers(environment: jinja2.Environment, renderer: FormRenderer | None = None) -> None:
    """Install form helpers as template globals."""
    renderer = renderer or FormRenderer()

    def form_builder(target: Any, **options: Any) -> FieldBuilder:
        return renderer.builder_for(target, RenderOptions(**options))

    def form_tag(target: Any, *nodes: Any, **options: Any) -> Markup:
        return renderer.wrap(target, nodes, RenderOptions(**options)).render()

    environment.globals.update(
        form_builder=form_builder,
        form_tag=form_tag,
        options_for_select=options_for_select,
        hidden_field_tag=hidden_field_tag,
    )


def configure_engine(engine: JinjaTemplateEngine) -> None:
    register_helpers(engine.engine)
