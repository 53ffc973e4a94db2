"""SQLAlchemy ORM instances as form-bound records."""

from __future__ import annotations

from typing import Any

from sqlalchemy import inspect
from sqlalchemy.orm import InstanceState

from boundform.forms.errors import AttributeNotFound
from boundform.forms.naming import camel_to_snake


class ModelRecord:
    """Adapts a mapped instance to the bound object interface.

    Newness follows the session identity map: transient and pending
    instances are new, persistent and detached ones are not. A mapper that
    inherits from another mapper is a specialization of that resource.
    """

    def __init__(self, instance: Any):
        self.instance = instance
        self._state: InstanceState = inspect(instance)
        self._mapper = self._state.mapper

    @property
    def is_new(self) -> bool:
        return not self._state.has_identity

    @property
    def resource_class(self) -> type:
        return self._mapper.class_

    @property
    def is_specialization(self) -> bool:
        return self._mapper.inherits is not None

    @property
    def model_name(self) -> str:
        return camel_to_snake(self._mapper.class_.__name__)

    @property
    def record_id(self) -> Any:
        identity = self._state.identity
        if identity is None:
            return None
        if len(identity) == 1:
            return identity[0]
        return "-".join(str(part) for part in identity)

    def get_attribute(self, name: str) -> Any:
        if name in self._mapper.relationships:
            value = getattr(self.instance, name)
            if value is not None and not self._mapper.relationships[name].uselist:
                return ModelRecord(value)
            return value
        if name.startswith("_") or not hasattr(self.instance, name):
            raise AttributeNotFound(name)
        return getattr(self.instance, name)

    def __repr__(self) -> str:
        return f"ModelRecord({self.instance!r})"


def as_record(obj: Any) -> Any:
    """Wrap mapped instances in ModelRecord; return anything else unchanged."""
    if isinstance(obj, ModelRecord):
        return obj
    state = inspect(obj, raiseerr=False)
    if isinstance(state, InstanceState):
        return ModelRecord(obj)
    return obj
