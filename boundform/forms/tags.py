"""Markup primitives shared by every control."""

from __future__ import annotations

from typing import Any

from markupsafe import Markup, escape


def render_attrs(attrs: dict[str, Any]) -> str:
    """Render a dict as HTML attributes string. Returns '' or ' key="val" key2="val2"'.

    Python-style keys are converted: class_ -> class, data_id -> data-id.
    True renders as key="key", False and None are dropped.
    """
    parts = []
    for k, v in attrs.items():
        if v is None or v is False:
            continue
        attr_name = k.rstrip("_").replace("_", "-")
        if v is True:
            v = attr_name
        parts.append(f'{attr_name}="{escape(str(v))}"')
    if not parts:
        return ""
    return " " + " ".join(parts)


def tag(name: str, attrs: dict[str, Any] | None = None) -> Markup:
    """Void element. tag("input", {"type": "text"}) -> <input type="text">"""
    return Markup(f"<{name}{render_attrs(attrs or {})}>")


def content_tag(name: str, content: Any = "", attrs: dict[str, Any] | None = None) -> Markup:
    """Element with escaped content. Markup content is kept as is."""
    return Markup(f"<{name}{render_attrs(attrs or {})}>{escape(content)}</{name}>")


def hidden_field_tag(name: str, value: Any) -> Markup:
    """<input name="..." type="hidden" value="...">"""
    return tag("input", {"name": name, "type": "hidden", "value": "" if value is None else value})
