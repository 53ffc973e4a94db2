"""Record-bound form building: naming, values, method emulation, options."""

from boundform.forms.core import FormRenderer, RenderedForm, RenderOptions, render_form
from boundform.forms.errors import (
    AmbiguousResource,
    AttributeNotFound,
    FormError,
    InvalidPath,
    MissingOptionsForSelect,
    UnexpectedOptions,
    UnsupportedMethod,
)
from boundform.forms.fields import FieldBuilder, FieldKind, FieldSpec
from boundform.forms.methods import HttpMethod, MethodPlan, OverrideField, plan_method
from boundform.forms.naming import resolve_id, resolve_name
from boundform.forms.options import (
    OptionDescriptor,
    OptionList,
    build_options,
    options_for_select,
    options_from_collection,
)
from boundform.forms.records import BoundObject, FormTarget, Record, default_naming, identify
from boundform.forms.values import AttributeReadable, read_attribute, resolve_value

__all__ = [
    "AmbiguousResource",
    "AttributeNotFound",
    "AttributeReadable",
    "BoundObject",
    "FieldBuilder",
    "FieldKind",
    "FieldSpec",
    "FormError",
    "FormRenderer",
    "FormTarget",
    "HttpMethod",
    "InvalidPath",
    "MethodPlan",
    "MissingOptionsForSelect",
    "OptionDescriptor",
    "OptionList",
    "OverrideField",
    "Record",
    "RenderOptions",
    "RenderedForm",
    "UnexpectedOptions",
    "UnsupportedMethod",
    "build_options",
    "default_naming",
    "identify",
    "options_for_select",
    "options_from_collection",
    "plan_method",
    "read_attribute",
    "render_form",
    "resolve_id",
    "resolve_name",
    "resolve_value",
]
