"""Form rendering: target resolution, method emulation and assembly."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from markupsafe import Markup, escape
from pydantic import BaseModel, ConfigDict

from boundform.config import Settings, get_settings
from boundform.db.records import as_record
from boundform.forms.errors import AmbiguousResource
from boundform.forms.fields import FieldBuilder, FieldKind, FieldSpec
from boundform.forms.methods import HttpMethod, MethodPlan, plan_method
from boundform.forms.records import (
    FormTarget,
    ResourceNamingStrategy,
    dom_class,
    dom_id,
    identify,
    model_name_for,
)
from boundform.forms.tags import hidden_field_tag, tag

logger = logging.getLogger(__name__)


class RenderOptions(BaseModel):
    """Per-call form configuration.

    url/method: explicit target, skipping record identification.
    anti_forgery_token: embedded as a hidden field on non-GET forms.
    model_name: param name override for bound fields.
    naming: ResourceNamingStrategy used for record identification.
    html: extra attributes for the <form> element.
    multipart: force enctype="multipart/form-data".
    submit_label: append a submit button with this label.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, protected_namespaces=())

    url: str | None = None
    method: str | None = None
    anti_forgery_token: str | None = None
    model_name: str | None = None
    naming: Callable[[str], str] | None = None
    html: dict[str, Any] = {}
    multipart: bool = False
    submit_label: str | None = None


@dataclass(frozen=True)
class RenderedForm:
    """A fully built form. Serializes through __html__ or render()."""

    action: str
    plan: MethodPlan
    hidden: tuple[Markup, ...] = ()
    fields: tuple[Markup, ...] = ()
    attrs: dict[str, Any] = field(default_factory=dict)

    @property
    def method(self) -> HttpMethod:
        return self.plan.wire_method

    def __html__(self) -> Markup:
        open_tag = tag("form", {
            "action": self.action,
            "method": self.method.value.lower(),
            **self.attrs,
        })
        return Markup("\n").join([open_tag, *self.hidden, *self.fields, Markup("</form>")])

    def render(self) -> Markup:
        return self.__html__()

    def __str__(self) -> str:
        return str(self.__html__())


@dataclass(frozen=True)
class _Resolved:
    target: FormTarget
    bound: Any
    model_name: str


class FormRenderer:
    """Builds forms for URLs, FormTargets and bound records.

    Usage:
        renderer = FormRenderer()

        form = renderer.render(
            article,
            [FieldSpec("title"), FieldSpec("body", kind="textarea")],
            RenderOptions(anti_forgery_token=token),
        )
        html = form.render()

    A target may be a URL string, a FormTarget, a bound record, or a list of
    records where the leading ones are parents of the last (nested resources).
    """

    def __init__(self, settings: Settings | None = None, naming: ResourceNamingStrategy | None = None):
        self.settings = settings or get_settings()
        self.naming = naming

    # -- Target resolution --

    def resolve(self, target: Any, options: RenderOptions | None = None) -> _Resolved:
        options = options or RenderOptions()
        bound = None
        parents: list[Any] = []

        if isinstance(target, FormTarget):
            form_target = target
        elif isinstance(target, str):
            form_target = FormTarget(url=target, method=options.method or HttpMethod.POST)
        else:
            if isinstance(target, (list, tuple)):
                if not target:
                    raise AmbiguousResource("Empty record list; pass at least the bound record")
                *parents, bound = [as_record(item) for item in target]
            else:
                bound = as_record(target)
            if options.url is not None:
                default = HttpMethod.POST if bound.is_new else HttpMethod.PUT
                form_target = FormTarget(url=options.url, method=options.method or default)
            else:
                form_target = identify(bound, options.naming or self.naming, parents)

        if options.method is not None and form_target.method is not HttpMethod.parse(options.method):
            form_target = FormTarget(url=form_target.url, method=options.method)

        if options.model_name is not None:
            model_name = options.model_name
        elif bound is not None:
            model_name = model_name_for(bound)
        else:
            model_name = ""

        return _Resolved(form_target, bound, model_name)

    def builder_for(self, target: Any, options: RenderOptions | None = None) -> FieldBuilder:
        """Field builder scoped to the target's model, for template-driven forms."""
        resolved = self.resolve(target, options)
        return FieldBuilder(resolved.model_name, resolved.bound, settings=self.settings)

    # -- Rendering --

    def render(
        self,
        target: Any,
        fields: Iterable[FieldSpec] = (),
        options: RenderOptions | None = None,
    ) -> RenderedForm:
        """Render a form with one control per field spec.

        Raises InvalidPath, UnsupportedMethod, AmbiguousResource,
        MissingOptionsForSelect or UnexpectedOptions before anything is built.
        """
        options = options or RenderOptions()
        resolved = self.resolve(target, options)
        plan = plan_method(resolved.target.method, self.settings.method_field)

        specs = list(fields)
        for spec in specs:
            spec.validate()

        builder = FieldBuilder(resolved.model_name, resolved.bound, settings=self.settings)
        nodes = [builder.field(spec) for spec in specs]
        if options.submit_label is not None:
            nodes.append(builder.submit(options.submit_label))

        multipart = options.multipart or any(spec.kind is FieldKind.FILE for spec in specs)
        return self._assemble(resolved, plan, nodes, options, multipart)

    def wrap(
        self,
        target: Any,
        nodes: Iterable[Any],
        options: RenderOptions | None = None,
    ) -> RenderedForm:
        """Wrap already rendered controls in a form for *target*."""
        options = options or RenderOptions()
        resolved = self.resolve(target, options)
        plan = plan_method(resolved.target.method, self.settings.method_field)
        return self._assemble(resolved, plan, [escape(node) for node in nodes], options, options.multipart)

    def _assemble(
        self,
        resolved: _Resolved,
        plan: MethodPlan,
        nodes: list[Markup],
        options: RenderOptions,
        multipart: bool,
    ) -> RenderedForm:
        hidden = []
        if plan.override_field is not None:
            hidden.append(hidden_field_tag(plan.override_field.name, plan.override_field.value))
        if options.anti_forgery_token is not None and plan.wire_method is not HttpMethod.GET:
            hidden.append(hidden_field_tag(self.settings.anti_forgery_field, options.anti_forgery_token))

        attrs: dict[str, Any] = {}
        bound = resolved.bound
        if bound is not None:
            prefix = "new" if bound.is_new else "edit"
            attrs["id"] = dom_id(bound, None if bound.is_new else prefix)
            attrs["class"] = dom_class(bound, prefix)
        if multipart:
            attrs["enctype"] = "multipart/form-data"
        attrs.update({k.rstrip("_"): v for k, v in options.html.items()})

        logger.debug(
            "Rendering form %s %s with %d field(s)",
            plan.wire_method.value,
            resolved.target.url,
            len(nodes),
        )
        return RenderedForm(
            action=resolved.target.url,
            plan=plan,
            hidden=tuple(hidden),
            fields=tuple(nodes),
            attrs=attrs,
        )


def render_form(
    target: Any,
    fields: Iterable[FieldSpec] = (),
    options: RenderOptions | None = None,
) -> RenderedForm:
    """Render with a FormRenderer built from the current settings."""
    return FormRenderer().render(target, fields, options)
