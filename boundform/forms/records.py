"""Record identification: inferring a form's URL and verb from a bound object.

A new record submits to its collection URL with POST, a persisted one to its
member URL with PUT:

    identify(Article())        -> FormTarget("/articles", POST)
    identify(Article(id=5))    -> FormTarget("/articles/5", PUT)

URL segments come from a ResourceNamingStrategy (type name -> segment) so
routing conventions stay with the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, ClassVar, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

from boundform.forms.errors import AmbiguousResource, AttributeNotFound
from boundform.forms.methods import HttpMethod
from boundform.forms.naming import camel_to_snake

logger = logging.getLogger(__name__)

ResourceNamingStrategy = Callable[[str], str]

_VOWELS = frozenset("aeiou")


@runtime_checkable
class BoundObject(Protocol):
    """What the form engine needs from a record."""

    @property
    def is_new(self) -> bool: ...

    @property
    def model_name(self) -> str: ...

    @property
    def record_id(self) -> Any: ...

    def get_attribute(self, name: str) -> Any: ...


@dataclass(frozen=True)
class FormTarget:
    """Where and how a form submits."""

    url: str
    method: HttpMethod = HttpMethod.POST

    def __post_init__(self):
        object.__setattr__(self, "method", HttpMethod.parse(self.method))


def pluralize(word: str) -> str:
    """Naive English plural. article -> articles, category -> categories"""
    if not word:
        return word
    if word.endswith("y") and len(word) > 1 and word[-2] not in _VOWELS:
        return word[:-1] + "ies"
    if word.endswith(("s", "x", "z", "ch", "sh")):
        return word + "es"
    return word + "s"


def default_naming(type_name: str) -> str:
    """BlogPost -> blog_posts"""
    return pluralize(camel_to_snake(type_name))


class Record(BaseModel):
    """Pydantic base for form-bound records.

    Each subclass declares a resource of its own. A subclass of a resource
    is a specialization and cannot be identified automatically unless it
    declares a resource segment itself:

        class Article(Record):
            title: str = ""

        class Draft(Article):                      # ambiguous
            ...

        class Announcement(Article, resource="announcements"):
            ...

    Pass ``abstract=True`` for intermediate bases that are not resources.
    A record is new until it has an ``id``.
    """

    model_config = ConfigDict(extra="allow")

    _resource_owner: ClassVar[type | None] = None
    _resource_segment: ClassVar[str | None] = None

    id: Any = None

    def __init_subclass__(cls, resource: str | None = None, abstract: bool = False, **kwargs):
        super().__init_subclass__(**kwargs)
        if abstract:
            cls._resource_owner = None
            cls._resource_segment = None
        elif resource is not None or cls._resource_owner is None:
            cls._resource_owner = cls
            cls._resource_segment = resource

    @property
    def is_new(self) -> bool:
        return self.id is None

    @property
    def model_name(self) -> str:
        return camel_to_snake(type(self).__name__)

    @property
    def record_id(self) -> Any:
        return self.id

    def get_attribute(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeNotFound(name)
        try:
            return getattr(self, name)
        except AttributeError:
            raise AttributeNotFound(name) from None


def resource_class(bound: Any) -> type:
    return getattr(bound, "resource_class", None) or type(bound)


def is_specialization(bound: Any) -> bool:
    """True when the bound object's type specializes another declared resource."""
    explicit = getattr(bound, "is_specialization", None)
    if explicit is not None:
        return bool(explicit)
    cls = resource_class(bound)
    owner = getattr(cls, "_resource_owner", None)
    return owner is not None and owner is not cls


def model_name_for(bound: Any) -> str:
    """Param name for a bound object. Article -> article"""
    name = getattr(bound, "model_name", None)
    if name:
        return name
    return camel_to_snake(resource_class(bound).__name__)


def record_id_for(bound: Any) -> Any:
    record_id = getattr(bound, "record_id", None)
    if record_id is None:
        record_id = getattr(bound, "id", None)
    return record_id


def resource_segment(bound: Any, naming: ResourceNamingStrategy | None = None) -> str:
    """URL segment for a bound object's resource collection."""
    cls = resource_class(bound)
    if is_specialization(bound):
        raise AmbiguousResource(
            f"{cls.__name__} specializes another resource type; pass an explicit url"
        )
    declared = getattr(cls, "_resource_segment", None)
    if declared:
        return declared
    return (naming or default_naming)(cls.__name__)


def _member_segments(bound: Any, naming: ResourceNamingStrategy | None) -> list[str]:
    record_id = record_id_for(bound)
    if record_id is None:
        raise AmbiguousResource(
            f"Persisted {resource_class(bound).__name__} has no identifier; pass an explicit url"
        )
    return [resource_segment(bound, naming), str(record_id)]


def identify(
    bound: BoundObject,
    naming: ResourceNamingStrategy | None = None,
    parents: Sequence[BoundObject] = (),
) -> FormTarget:
    """Derive the form target for *bound*.

    *parents* are persisted records the resource is nested under, outermost
    first: identify(comment, parents=[article]) -> /articles/5/comments
    """
    segments: list[str] = []
    for parent in parents:
        if parent.is_new:
            raise AmbiguousResource(
                f"Parent {resource_class(parent).__name__} is not persisted; pass an explicit url"
            )
        segments.extend(_member_segments(parent, naming))

    if bound.is_new:
        segments.append(resource_segment(bound, naming))
        target = FormTarget(url="/" + "/".join(segments), method=HttpMethod.POST)
    else:
        segments.extend(_member_segments(bound, naming))
        target = FormTarget(url="/" + "/".join(segments), method=HttpMethod.PUT)

    logger.debug("Identified %s as %s %s", resource_class(bound).__name__, target.method.value, target.url)
    return target


def dom_id(bound: Any, prefix: str | None = None) -> str:
    """Element id for a record. new_article, article_5, edit_article_5"""
    model = model_name_for(bound)
    if bound.is_new:
        return f"{prefix or 'new'}_{model}"
    base = f"{model}_{record_id_for(bound)}"
    return f"{prefix}_{base}" if prefix else base


def dom_class(bound: Any, prefix: str | None = None) -> str:
    """Element class for a record. article, edit_article"""
    model = model_name_for(bound)
    return f"{prefix}_{model}" if prefix else model
