"""Selector model: compound selectors linked key-first into a chain."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum


class NestingOperator(Enum):
    """Combinator joining a compound to its ancestor (or preceding sibling).

    NONE is the descendant combinator and the weakest constraint.
    """

    NONE = " "
    CHILD = ">"
    SIBLING_ADJACENT = "+"
    SIBLING_GENERAL = "~"


@dataclass(frozen=True)
class AttributeMatch:
    """An attribute predicate such as ``[target="_blank"]``.

    ``operator`` and ``value`` are None for a presence test (``[disabled]``).
    """

    name: str
    operator: str | None = None
    value: str | None = None
    flags: str | None = None


@dataclass(frozen=True)
class PseudoMatch:
    """A pseudo-class or pseudo-element, name written with its colons."""

    name: str  # ":hover", "::before"
    argument: str | None = None  # raw text inside the parentheses


@dataclass(frozen=True)
class CompoundSelector:
    """The constraints on a single element, plus the link to its ancestor.

    Attributes:
        tag: Lower-cased element name, ``*`` for the universal selector, or None.
        id: Element id without the ``#``.
        classes: Class names without the ``.``.
        attributes: Attribute predicates.
        pseudos: Pseudo-class and pseudo-element predicates.
        operator: Combinator joining this compound to ``parent``.
        parent: The compound written to the left, if any.
    """

    tag: str | None = None
    id: str | None = None
    classes: frozenset[str] = frozenset()
    attributes: frozenset[AttributeMatch] = frozenset()
    pseudos: frozenset[PseudoMatch] = frozenset()
    operator: NestingOperator = NestingOperator.NONE
    parent: CompoundSelector | None = field(default=None, repr=False)

    def tokens(self) -> set[str]:
        """Simple selectors of this compound in written form (``.c``, ``#i``, ``tag``)."""
        result = {"." + name for name in self.classes}
        if self.tag:
            result.add(self.tag)
        if self.id:
            result.add("#" + self.id)
        return result

    def ancestors(self) -> Iterator[CompoundSelector]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent


EMPTY_COMPOUND = CompoundSelector()


@dataclass(frozen=True)
class Selector:
    """One complex selector: its source text and its key compound."""

    text: str
    key: CompoundSelector

    def compounds(self) -> Iterator[CompoundSelector]:
        """Walk the chain from the key compound outward."""
        yield self.key
        yield from self.key.ancestors()

    def tokens(self) -> set[str]:
        result: set[str] = set()
        for compound in self.compounds():
            result |= compound.tokens()
        return result

    def __str__(self) -> str:
        return self.text
