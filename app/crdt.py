"""
Grow-only Set CRDT.

A GrowOnlySet only ever accumulates elements. Insert and merge are both plain
set union, so replicas merged in any order, any number of times, converge to
the union of everything inserted anywhere.
"""

import copy
from typing import Any, Iterable, Iterator, List, Optional


class GrowOnlySet:
    """
    A Conflict-Free Replicated Data Type (CRDT) for a grow-only set.

    Elements must be hashable and mutually ordered. The instance is not
    synchronized; a replica shared between threads needs its own lock
    (see replica.Replica).
    """

    __hash__ = None  # mutable

    def __init__(self, elements: Optional[Iterable[Any]] = None):
        self.value = set()
        if elements is not None:
            for element in elements:
                self.insert(element)

    def insert(self, element: Any) -> None:
        """
        Insert an element. Re-inserting an existing element is a no-op.

        Elements must be mutually ordered; mixing types such as 1 and "a"
        makes elements(), iteration and encoding raise TypeError.
        """
        self.value.add(element)

    def contains(self, element: Any) -> bool:
        """Return True if the element is in the set."""
        return element in self.value

    def merge(self, other: "GrowOnlySet") -> None:
        """
        Merge another GrowOnlySet into this one.

        The other set is read, never modified. Every element goes through
        insert(), so the receiver ends up holding the union of both.
        """
        if not isinstance(other, GrowOnlySet):
            raise TypeError(f"Cannot merge {type(other).__name__} into GrowOnlySet")
        if other is self:
            return
        for element in list(other.value):
            self.insert(element)

    def is_subset_of(self, other: "GrowOnlySet") -> bool:
        """Partial order of the semilattice: every element of self is in other."""
        return self.value <= other.value

    def elements(self) -> List[Any]:
        """Get all elements in the set, in element order."""
        return sorted(self.value)

    def copy(self) -> "GrowOnlySet":
        replica = GrowOnlySet()
        replica.value = set(self.value)
        return replica

    def __copy__(self) -> "GrowOnlySet":
        return self.copy()

    def __deepcopy__(self, memo) -> "GrowOnlySet":
        replica = GrowOnlySet()
        replica.value = copy.deepcopy(self.value, memo)
        return replica

    def __contains__(self, element: Any) -> bool:
        return self.contains(element)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.elements())

    def __len__(self) -> int:
        return len(self.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GrowOnlySet):
            return NotImplemented
        return self.value == other.value

    def __le__(self, other: "GrowOnlySet") -> bool:
        if not isinstance(other, GrowOnlySet):
            return NotImplemented
        return self.is_subset_of(other)

    def __ge__(self, other: "GrowOnlySet") -> bool:
        if not isinstance(other, GrowOnlySet):
            return NotImplemented
        return other.is_subset_of(self)

    def __repr__(self) -> str:
        try:
            shown = self.elements()
        except TypeError:
            # Mixed element types; show storage order.
            shown = list(self.value)
        return f"GrowOnlySet({shown!r})"
