"""Option lists for select controls."""

from __future__ import annotations

from collections.abc import Collection, Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from markupsafe import Markup, escape

from boundform.forms.values import read_attribute, stringify


@dataclass(frozen=True)
class OptionDescriptor:
    label: str
    value: str
    selected: bool = False

    def __html__(self) -> Markup:
        selected = ' selected="selected"' if self.selected else ""
        return Markup(f'<option value="{escape(self.value)}"{selected}>{escape(self.label)}</option>')


def _is_pair(item: Any) -> bool:
    return isinstance(item, (tuple, list)) and len(item) == 2


def _selected_values(selected: Any) -> frozenset[str]:
    if selected is None:
        return frozenset()
    if isinstance(selected, Collection) and not isinstance(selected, (str, bytes)):
        return frozenset(stringify(value) for value in selected)
    return frozenset({stringify(selected)})


class OptionList:
    """Ordered option descriptors for a source, computed on each iteration.

    Scalars are both label and value, (label, value) pairs are split.
    Selection compares stringified values, so 2 selects the option "2".
    """

    def __init__(self, source: Iterable[Any], selected: Any = None):
        self.source = list(source)
        self.selected = selected

    def __iter__(self) -> Iterator[OptionDescriptor]:
        chosen = _selected_values(self.selected)
        for item in self.source:
            if _is_pair(item):
                label, value = stringify(item[0]), stringify(item[1])
            else:
                label = value = stringify(item)
            yield OptionDescriptor(label=label, value=value, selected=value in chosen)

    def __len__(self) -> int:
        return len(self.source)

    def __html__(self) -> Markup:
        return Markup("\n").join(self)

    def render(self) -> Markup:
        return self.__html__()

    def __str__(self) -> str:
        return str(self.__html__())

    def __repr__(self) -> str:
        return f"OptionList({self.source!r}, selected={self.selected!r})"


def build_options(source: Iterable[Any], selected: Any = None) -> OptionList:
    """build_options([("Lisabon", 1), ("Madrid", 2)], 2) marks Madrid selected."""
    return OptionList(source, selected)


def options_from_collection(
    collection: Iterable[Any],
    value_attr: str | Sequence[str],
    label_attr: str | Sequence[str],
    selected: Any = None,
) -> OptionList:
    """Options built from records, reading label and value off each one."""
    pairs = [
        (read_attribute(item, label_attr), read_attribute(item, value_attr))
        for item in collection
    ]
    return OptionList(pairs, selected)


def options_for_select(source: Iterable[Any], selected: Any = None) -> Markup:
    """Option markup for use inside a hand-written <select>."""
    return build_options(source, selected).render()
