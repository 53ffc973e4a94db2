"""Field name and id derivation from a model name and an attribute path."""

from __future__ import annotations

import re
from collections.abc import Sequence

from boundform.forms.errors import InvalidPath

_UNSAFE_ID_CHARS = re.compile(r"[^-\w.:]")
_SEGMENT = re.compile(r"\w+")

AttributePath = tuple[str, ...]


def normalize_path(path: str | Sequence[str]) -> AttributePath:
    """Return *path* as a tuple of segments.

    Strings are split on dots, so ``"address.city"`` and
    ``["address", "city"]`` are the same path.
    Segments are identifiers, so no bracket or space can reach a name.
    """
    if isinstance(path, str):
        segments = tuple(path.split("."))
    else:
        segments = tuple(path)

    if not segments:
        raise InvalidPath("Attribute path must have at least one segment")
    for segment in segments:
        if not isinstance(segment, str) or not _SEGMENT.fullmatch(segment):
            raise InvalidPath(f"Invalid segment {segment!r} in attribute path {segments!r}")
    return segments


def resolve_name(model_name: str, path: str | Sequence[str]) -> str:
    """article + [title] -> article[title]; "" + [q] -> q"""
    segments = normalize_path(path)
    if model_name:
        base, rest = model_name, segments
    else:
        base, rest = segments[0], segments[1:]
    return base + "".join(f"[{segment}]" for segment in rest)


def resolve_id(model_name: str, path: str | Sequence[str]) -> str:
    """person + [address, city] -> person_address_city"""
    segments = normalize_path(path)
    parts = [model_name, *segments] if model_name else list(segments)
    return "_".join(parts)


def sanitize_id(value: str) -> str:
    """Make an arbitrary value usable as an id suffix. "Big Box" -> big_box"""
    return _UNSAFE_ID_CHARS.sub("_", value.strip()).lower()


def camel_to_snake(name: str) -> str:
    """Convert CamelCase to snake_case. BlogPost -> blog_post"""
    return re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", name).lower()


def humanize(segment: str) -> str:
    """Default label text for a segment. first_name -> First Name"""
    if segment.endswith("_id"):
        segment = segment[:-3]
    return segment.replace("_", " ").title()
