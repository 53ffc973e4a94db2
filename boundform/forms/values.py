"""Reading current field values off bound objects."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from boundform.forms.errors import AttributeNotFound
from boundform.forms.naming import normalize_path

if TYPE_CHECKING:
    from boundform.forms.fields import FieldSpec

logger = logging.getLogger(__name__)


@runtime_checkable
class AttributeReadable(Protocol):
    """Anything that can look up one attribute by name.

    Implementations raise AttributeNotFound for unknown names. The returned
    value may itself be AttributeReadable, which is how nested paths resolve.
    """

    def get_attribute(self, name: str) -> Any: ...


def read_segment(obj: Any, name: str) -> Any:
    """Look up a single attribute, raising AttributeNotFound when absent."""
    if isinstance(obj, AttributeReadable):
        return obj.get_attribute(name)
    if isinstance(obj, Mapping):
        try:
            return obj[name]
        except KeyError:
            raise AttributeNotFound(name) from None
    try:
        return getattr(obj, name)
    except AttributeError:
        raise AttributeNotFound(name) from None


def read_attribute(obj: Any, path: str | Sequence[str]) -> Any:
    """Follow *path* through *obj*. Missing attributes read as None."""
    current = obj
    for segment in normalize_path(path):
        if current is None:
            return None
        try:
            current = read_segment(current, segment)
        except AttributeNotFound:
            logger.debug("No attribute %r on %s", segment, type(current).__name__)
            return None
    return current


def stringify(value: Any) -> str:
    """String form of a value as it appears in markup. None -> ''"""
    if value is None:
        return ""
    return str(value)


def current_value(path: str | Sequence[str], bound: Any = None, explicit: Any = None) -> Any:
    """The explicit value if set, else the value read off *bound*."""
    if explicit is not None:
        return explicit
    if bound is None:
        return None
    return read_attribute(bound, path)


def resolve_value(spec: FieldSpec, bound: Any = None) -> Any:
    """Current value for a field spec."""
    return current_value(spec.path, bound, spec.value)
