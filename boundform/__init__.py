"""boundform - HTML forms bound to records, with method emulation and option lists."""

from boundform.forms import (
    FieldBuilder,
    FieldSpec,
    FormRenderer,
    FormTarget,
    Record,
    RenderOptions,
    build_options,
    identify,
    render_form,
)

__all__ = [
    "FieldBuilder",
    "FieldSpec",
    "FormRenderer",
    "FormTarget",
    "Record",
    "RenderOptions",
    "build_options",
    "identify",
    "render_form",
]
