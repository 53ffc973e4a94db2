"""HTTP method emulation for HTML forms.

Browsers only submit GET and POST. Other verbs travel as a POST carrying a
hidden ``_method`` field which MethodOverrideMiddleware reads back.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from boundform.forms.errors import UnsupportedMethod

METHOD_FIELD_NAME = "_method"


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    @classmethod
    def parse(cls, method: str | HttpMethod) -> HttpMethod:
        if isinstance(method, cls):
            return method
        try:
            return cls(str(method).upper())
        except ValueError:
            raise UnsupportedMethod(str(method)) from None


WIRE_METHODS = frozenset({HttpMethod.GET, HttpMethod.POST})


@dataclass(frozen=True)
class OverrideField:
    name: str
    value: str


@dataclass(frozen=True)
class MethodPlan:
    """Method to put on the form element plus the hidden override, if any."""

    wire_method: HttpMethod
    override_field: OverrideField | None = None


def plan_method(method: str | HttpMethod, field_name: str = METHOD_FIELD_NAME) -> MethodPlan:
    """Plan how a form submits *method*.

    plan_method("PUT") -> MethodPlan(POST, OverrideField("_method", "put"))
    """
    verb = HttpMethod.parse(method)
    if verb in WIRE_METHODS:
        return MethodPlan(wire_method=verb)
    return MethodPlan(
        wire_method=HttpMethod.POST,
        override_field=OverrideField(name=field_name, value=verb.value.lower()),
    )
