"""Fixed-width positional slot triple (primary, secondary, extra)."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

SLOT_COUNT = 3


@dataclass(frozen=True, slots=True)
class SlotTriple:
    """
    Three positional, optional string slots read from flat table columns.

    Lines carry symbol/color/shape triples and stations carry a number triple.
    The order is significant: ``compact()`` stops at the first absent or
    empty slot, ``until_absent()`` only at the first absent one.
    """

    primary: str | None = None
    secondary: str | None = None
    extra: str | None = None

    def __iter__(self) -> Iterator[str | None]:
        yield self.primary
        yield self.secondary
        yield self.extra

    def __len__(self) -> int:
        return SLOT_COUNT

    def compact(self) -> list[str]:
        """
        Return slot values in order, stopping at the first absent or empty slot.

        Examples:
            >>> SlotTriple("M", None, "X").compact()
            ['M']
            >>> SlotTriple("", "G", None).compact()
            []
        """
        values: list[str] = []
        for value in self:
            if not value:
                break
            values.append(value)
        return values

    def until_absent(self) -> list[str]:
        """
        Return slot values in order, stopping at the first absent slot.

        Empty strings are kept, so a blank symbol still occupies its position.

        Examples:
            >>> SlotTriple("", "G", None).until_absent()
            ['', 'G']
        """
        values: list[str] = []
        for value in self:
            if value is None:
                break
            values.append(value)
        return values

    def present(self) -> list[str]:
        """
        Return every non-absent slot value in order, skipping gaps.

        Examples:
            >>> SlotTriple("circle", None, "square").present()
            ['circle', 'square']
        """
        return [value for value in self if value is not None]

    def with_fallback(self, fallback: str | None) -> list[str | None]:
        """Return all three slots, substituting fallback for absent ones."""
        return [fallback if value is None else value for value in self]
