"""Field specs and the builder that renders them for one bound model."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from markupsafe import Markup

from boundform.config import Settings, get_settings
from boundform.forms.errors import FormError, MissingOptionsForSelect, UnexpectedOptions
from boundform.forms.naming import (
    AttributePath,
    humanize,
    normalize_path,
    resolve_id,
    resolve_name,
    sanitize_id,
)
from boundform.forms.options import OptionList, build_options, options_from_collection
from boundform.forms.tags import content_tag, hidden_field_tag, tag
from boundform.forms.values import current_value, stringify


class FieldKind(str, Enum):
    TEXT = "text"
    TEXTAREA = "textarea"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    HIDDEN = "hidden"
    PASSWORD = "password"
    SELECT = "select"
    EMAIL = "email"
    NUMBER = "number"
    URL = "url"
    SEARCH = "search"
    TEL = "tel"
    DATE = "date"
    COLOR = "color"
    FILE = "file"


@dataclass(frozen=True)
class FieldSpec:
    """One field of a rendered form.

    ``value`` overrides the bound object's value; for radio buttons it is
    the button's own value. ``options`` is required for selects and
    rejected for every other kind.
    """

    path: str | Sequence[str]
    kind: FieldKind = FieldKind.TEXT
    value: Any = None
    options: Iterable[Any] | None = None
    attrs: dict[str, Any] = field(default_factory=dict)
    label: str | None = None
    multiple: bool = False
    include_blank: bool | str = False
    checked_value: str | None = None
    unchecked_value: str | None = None

    def __post_init__(self):
        object.__setattr__(self, "kind", FieldKind(self.kind))

    def validate(self) -> None:
        normalize_path(self.path)
        if self.kind is FieldKind.SELECT and self.options is None:
            raise MissingOptionsForSelect(f"Select field {self.path!r} has no options")
        if self.kind is not FieldKind.SELECT and self.options is not None:
            raise UnexpectedOptions(f"{self.kind.value} field {self.path!r} cannot take options")
        if self.kind is FieldKind.RADIO and self.value is None:
            raise FormError(f"Radio field {self.path!r} needs a value")


class FieldBuilder:
    """Renders controls for one model without repeating its name.

    Usage:
        f = FieldBuilder("article", article)
        f.text_field("title")         # name="article[title]" id="article_title"
        f.select("category_id", [("News", 1), ("Blog", 2)])

        address = f.fields_for("address")
        address.text_field("city")    # name="article[address][city]"

    With an empty model name the path itself is the name, which suits
    search boxes and other forms that are not bound to a record.
    """

    def __init__(
        self,
        model_name: str = "",
        bound: Any = None,
        *,
        prefix: Sequence[str] = (),
        settings: Settings | None = None,
    ):
        self.model_name = model_name
        self.bound = bound
        self.prefix: AttributePath = tuple(prefix)
        self.settings = settings or get_settings()

    # -- Naming & values --

    def path(self, path: str | Sequence[str]) -> AttributePath:
        return self.prefix + normalize_path(path)

    def name(self, path: str | Sequence[str]) -> str:
        return resolve_name(self.model_name, self.path(path))

    def id(self, path: str | Sequence[str]) -> str:
        return resolve_id(self.model_name, self.path(path))

    def value(self, path: str | Sequence[str], explicit: Any = None) -> Any:
        return current_value(self.path(path), self.bound, explicit)

    def fields_for(self, path: str | Sequence[str]) -> FieldBuilder:
        """Builder for a nested attribute, sharing this builder's bound object."""
        return FieldBuilder(
            self.model_name, self.bound, prefix=self.path(path), settings=self.settings
        )

    # -- Controls --

    def input_field(self, input_type: str, path, value: Any = None, **attrs) -> Markup:
        current = self.value(path, value)
        return tag("input", {
            "type": input_type,
            "id": self.id(path),
            "name": self.name(path),
            "value": None if current is None else stringify(current),
            **attrs,
        })

    def text_field(self, path, value: Any = None, **attrs) -> Markup:
        return self.input_field("text", path, value, **attrs)

    def hidden_field(self, path, value: Any = None, **attrs) -> Markup:
        return self.input_field("hidden", path, value, **attrs)

    def password_field(self, path, value: Any = None, **attrs) -> Markup:
        """Password inputs never echo the bound value."""
        return tag("input", {
            "type": "password",
            "id": self.id(path),
            "name": self.name(path),
            "value": None if value is None else stringify(value),
            **attrs,
        })

    def file_field(self, path, **attrs) -> Markup:
        return tag("input", {"type": "file", "id": self.id(path), "name": self.name(path), **attrs})

    def text_area(self, path, value: Any = None, **attrs) -> Markup:
        return content_tag(
            "textarea",
            stringify(self.value(path, value)),
            {"id": self.id(path), "name": self.name(path), **attrs},
        )

    def check_box(
        self,
        path,
        checked_value: str | None = None,
        unchecked_value: str | None = None,
        value: Any = None,
        **attrs,
    ) -> Markup:
        """Check box preceded by a hidden field carrying the unchecked value."""
        on = checked_value if checked_value is not None else self.settings.checkbox_on_value
        off = unchecked_value if unchecked_value is not None else self.settings.checkbox_off_value
        current = self.value(path, value)
        checked = current is True or (
            current is not None and current is not False and stringify(current) == on
        )

        html = ""
        if self.settings.include_hidden_unchecked:
            html += str(hidden_field_tag(self.name(path), off))
        html += str(tag("input", {
            "type": "checkbox",
            "id": self.id(path),
            "name": self.name(path),
            "value": on,
            "checked": checked,
            **attrs,
        }))
        return Markup(html)

    def radio_button(self, path, tag_value: Any, **attrs) -> Markup:
        """Radio button checked when the bound value equals *tag_value*."""
        tag_value = stringify(tag_value)
        current = self.value(path)
        return tag("input", {
            "type": "radio",
            "id": f"{self.id(path)}_{sanitize_id(tag_value)}",
            "name": self.name(path),
            "value": tag_value,
            "checked": current is not None and stringify(current) == tag_value,
            **attrs,
        })

    def select(
        self,
        path,
        options: Iterable[Any] | None,
        selected: Any = None,
        include_blank: bool | str = False,
        prompt: str | None = None,
        multiple: bool = False,
        **attrs,
    ) -> Markup:
        """Select box whose options are pre-selected from the bound value.

        A ready-made OptionList keeps its own selection.
        """
        if options is None:
            raise MissingOptionsForSelect(f"Select field {path!r} has no options")
        current = self.value(path, selected)
        if not isinstance(options, OptionList):
            options = build_options(options, current)

        parts = []
        if include_blank:
            blank = include_blank if isinstance(include_blank, str) else ""
            parts.append(content_tag("option", blank, {"value": ""}))
        elif prompt is not None and current is None:
            parts.append(content_tag("option", prompt, {"value": ""}))
        parts.extend(options)

        name = self.name(path) + ("[]" if multiple else "")
        return content_tag(
            "select",
            Markup("\n").join(parts),
            {"id": self.id(path), "name": name, "multiple": multiple, **attrs},
        )

    def collection_select(
        self,
        path,
        collection: Iterable[Any],
        value_attr: str | Sequence[str],
        label_attr: str | Sequence[str],
        selected: Any = None,
        **kwargs,
    ) -> Markup:
        options = options_from_collection(
            collection, value_attr, label_attr, self.value(path, selected)
        )
        return self.select(path, options, **kwargs)

    def label(self, path, text: str | None = None, **attrs) -> Markup:
        if text is None:
            text = humanize(self.path(path)[-1])
        return content_tag("label", text, {"for": self.id(path), **attrs})

    def submit(self, value: str | None = None, **attrs) -> Markup:
        """Submit button. Defaults to "Create Article" / "Update Article"."""
        if value is None:
            value = self._default_submit_label()
        return tag("input", {"type": "submit", "name": "commit", "value": value, **attrs})

    def _default_submit_label(self) -> str:
        is_new = getattr(self.bound, "is_new", None)
        if is_new is None or not self.model_name:
            return "Submit"
        action = "Create" if is_new else "Update"
        return f"{action} {humanize(self.model_name)}"

    # -- Specs --

    def field(self, spec: FieldSpec) -> Markup:
        """Render the control described by *spec*, preceded by its label if set."""
        spec.validate()
        kind = spec.kind
        attrs = dict(spec.attrs)

        if kind is FieldKind.SELECT:
            control = self.select(
                spec.path,
                spec.options,
                selected=spec.value,
                include_blank=spec.include_blank,
                multiple=spec.multiple,
                **attrs,
            )
        elif kind is FieldKind.CHECKBOX:
            control = self.check_box(
                spec.path, spec.checked_value, spec.unchecked_value, value=spec.value, **attrs
            )
        elif kind is FieldKind.RADIO:
            control = self.radio_button(spec.path, spec.value, **attrs)
        elif kind is FieldKind.TEXTAREA:
            control = self.text_area(spec.path, spec.value, **attrs)
        elif kind is FieldKind.PASSWORD:
            control = self.password_field(spec.path, spec.value, **attrs)
        elif kind is FieldKind.FILE:
            control = self.file_field(spec.path, **attrs)
        else:
            control = self.input_field(kind.value, spec.path, spec.value, **attrs)

        if spec.label is None:
            return control
        return Markup(str(self.label(spec.path, spec.label)) + "\n" + str(control))

    def __repr__(self) -> str:
        return f"FieldBuilder({self.model_name!r}, prefix={self.prefix!r})"
