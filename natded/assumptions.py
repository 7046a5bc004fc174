"""Assumption sets: immutable label → formula mappings.

An ``AssumptionSet`` records the open hypotheses of a derivation. Each label
names exactly one formula for the lifetime of the set. Sets are never
modified in place; ``without`` and ``merge`` build new ones.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterator, Mapping
from types import MappingProxyType

from .errors import InconsistentLabel
from .formulas import Formula

Label = Hashable


class AssumptionSet(Mapping[Label, Formula]):
    __slots__ = ("_items",)

    _items: MappingProxyType[Label, Formula]

    def __new__(cls, items: Mapping[Label, Formula] | None = None) -> AssumptionSet:
        self = object.__new__(cls)
        object.__setattr__(self, "_items", MappingProxyType(dict(items) if items else {}))
        return self

    def __init__(self, items: Mapping[Label, Formula] | None = None) -> None:
        # all state is fixed in __new__; calling __init__ again changes nothing
        pass

    @classmethod
    def of(cls, label: Label, formula: Formula) -> AssumptionSet:
        return cls({label: formula})

    def __getitem__(self, label: Label) -> Formula:
        return self._items[label]

    def __iter__(self) -> Iterator[Label]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("AssumptionSet is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("AssumptionSet is immutable")

    def __hash__(self) -> int:
        return hash(frozenset(self._items.items()))

    def __repr__(self) -> str:
        return f"AssumptionSet({dict(self._items)!r})"

    def __reduce__(self) -> tuple[type[AssumptionSet], tuple[dict[Label, Formula]]]:
        return (AssumptionSet, (dict(self._items),))

    def without(self, label: Label) -> AssumptionSet:
        """A copy of this set lacking ``label`` (which must be present)."""
        items = dict(self._items)
        del items[label]
        return AssumptionSet(items)


EMPTY = AssumptionSet()


def merge(a: Mapping[Label, Formula], b: Mapping[Label, Formula]) -> AssumptionSet:
    """Union of two assumption sets.

    A label present in both inputs must carry structurally equal formulas in
    each, otherwise ``InconsistentLabel`` is raised and nothing is built.
    """
    items = dict(a)
    for label, formula in b.items():
        if label in items and items[label] != formula:
            raise InconsistentLabel(label, items[label], formula)
        items[label] = formula
    return AssumptionSet(items)
