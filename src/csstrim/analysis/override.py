"""Override analyzer: proves that one selector always masks another.

``always_overrides(a, b)`` holds when every element matched by ``b`` is also
matched by ``a`` and ``a`` is at least as specific as ``b``, so ``a`` wins the
cascade wherever ``b`` applies (given that ``a`` comes later, or, in strict
mode, whatever the order). The proof is structural and conservative: chains
are compared compound by compound from the key compound outward, and any
constraint the rules below do not understand makes the proof fail.

The always-matching assumption set relaxes the comparison. A selector such as
``.js`` or ``body`` listed there is taken to hold on every element where it is
not written, so ``html.js .menu`` can override ``.menu``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from csstrim.analysis.index import CandidateIndex, Position
from csstrim.model.selector import EMPTY_COMPOUND, CompoundSelector, NestingOperator, Selector
from csstrim.model.stylesheet import Rule, Stylesheet

logger = logging.getLogger("csstrim.analysis")


@dataclass(frozen=True)
class Assumptions:
    """The always-matching set, pre-split for the compound comparisons."""

    selectors: frozenset[str]
    classes: frozenset[str]

    @classmethod
    def of(cls, always_matches: Iterable[str]) -> Assumptions:
        selectors = frozenset(always_matches)
        return cls(
            selectors=selectors,
            classes=frozenset(s[1:] for s in selectors if s.startswith(".")),
        )


# ---------------------------------------------------------------------------
# Compound comparison
# ---------------------------------------------------------------------------


def _id_overrides(a: str | None, b: str | None, assume: Assumptions) -> bool:
    return a == b or (a is not None and b is None and "#" + a in assume.selectors)


def _tag_overrides(a: str | None, b: str | None, assume: Assumptions) -> bool:
    return a == b or (a is not None and b is None and a in assume.selectors)


def _classes_override(a: frozenset[str], b: frozenset[str], assume: Assumptions) -> bool:
    # Extra classes on a must be guaranteed present, or a would stop
    # matching somewhere b matches. Extra classes on b make b more specific.
    return a <= (b | assume.classes) and b <= a


def _operator_overrides(a: NestingOperator, b: NestingOperator, strict: bool) -> bool:
    if a is b:
        return True
    if strict:
        return False
    return (a is NestingOperator.NONE and b is NestingOperator.CHILD) or (
        a is NestingOperator.SIBLING_GENERAL and b is NestingOperator.SIBLING_ADJACENT
    )


def compound_overrides(
    a: CompoundSelector, b: CompoundSelector, assume: Assumptions, strict: bool = False
) -> bool:
    return (
        _id_overrides(a.id, b.id, assume)
        and _tag_overrides(a.tag, b.tag, assume)
        and _operator_overrides(a.operator, b.operator, strict)
        and a.attributes == b.attributes
        and a.pseudos == b.pseudos
        and _classes_override(a.classes, b.classes, assume)
    )


def _holds_unconditionally(compound: CompoundSelector | None, assume: Assumptions) -> bool:
    """True when every compound from *compound* outward matches on its own.

    Each compound still demands that an element exist there, so it must be
    made of always-matching tags, ids and classes. A bare ``*`` is not.
    """
    while compound is not None:
        if not compound_overrides(compound, EMPTY_COMPOUND, assume, strict=True):
            return False
        compound = compound.parent
    return True


# ---------------------------------------------------------------------------
# Chain comparison
# ---------------------------------------------------------------------------


def always_overrides(
    a: Selector,
    b: Selector,
    always_matches: Iterable[str] | Assumptions = frozenset(),
    strict: bool = False,
) -> bool:
    """True if selector *a* always overrides selector *b*.

    ``strict`` disables the combinator relaxations (descendant for child,
    general for adjacent sibling). It is used when *a* precedes *b* in the
    cascade and must win on specificity alone.
    """
    assume = always_matches if isinstance(always_matches, Assumptions) else Assumptions.of(always_matches)
    x: CompoundSelector | None = a.key
    y: CompoundSelector | None = b.key
    while x is not None:
        if y is None:
            # b is exhausted; a's outer ancestors must match unconditionally.
            return _holds_unconditionally(x, assume)
        if not compound_overrides(x, y, assume, strict):
            return False
        x, y = x.parent, y.parent
    return y is None


def _compound_covers(a: CompoundSelector, b: CompoundSelector, assume: Assumptions) -> bool:
    return (
        (a.id is None or a.id == b.id or "#" + a.id in assume.selectors)
        and (a.tag in (None, "*") or a.tag == b.tag or a.tag in assume.selectors)
        and a.classes <= (b.classes | assume.classes)
        and a.attributes <= b.attributes
        and a.pseudos == b.pseudos
    )


def always_covers(
    a: Selector,
    b: Selector,
    always_matches: Iterable[str] | Assumptions = frozenset(),
) -> bool:
    """True if *a* matches every element *b* matches, whatever their specificity.

    Only an ``!important`` declaration can rely on this: it beats a normal
    declaration regardless of specificity and order.
    """
    assume = always_matches if isinstance(always_matches, Assumptions) else Assumptions.of(always_matches)
    x: CompoundSelector | None = a.key
    y: CompoundSelector | None = b.key
    while x is not None:
        if y is None:
            return _holds_unconditionally(x, assume)
        if not _compound_covers(x, y, assume):
            return False
        if x.parent is not None and not _operator_overrides(x.operator, y.operator, strict=False):
            return False
        x, y = x.parent, y.parent
    return True


# ---------------------------------------------------------------------------
# Cascade application
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Override:
    """``winner`` masks ``loser``.

    With ``important_only`` the proof holds for the winner's ``!important``
    declarations only.
    """

    winner: Position
    loser: Position
    important_only: bool = False


def _key(position: Position) -> tuple[int, int]:
    return position.rule_pos, position.selector_pos


def find_overrides(
    stylesheet: Stylesheet, index: CandidateIndex, always_matches: Iterable[str]
) -> list[Override]:
    """All override edges between selectors of distinct rules, ordered by loser."""
    assume = Assumptions.of(always_matches)
    overrides: list[Override] = []

    for a in index.positions:
        for b in index.candidates(a):
            # Only pairs across rules, with a earlier in the cascade.
            if b.rule_pos <= a.rule_pos:
                continue
            if always_overrides(b.selector, a.selector, assume):
                overrides.append(Override(winner=b, loser=a))
            elif always_overrides(a.selector, b.selector, assume, strict=True):
                overrides.append(Override(winner=a, loser=b))

    proven = {(_key(o.winner), _key(o.loser)) for o in overrides}
    for winner in index.positions:
        rule = stylesheet.nodes[winner.rule_pos]
        assert isinstance(rule, Rule)
        if not any(decl.important for decl in rule.declarations):
            continue
        for loser in index.positions:
            if loser.rule_pos == winner.rule_pos or (_key(winner), _key(loser)) in proven:
                continue
            if always_covers(winner.selector, loser.selector, assume):
                overrides.append(Override(winner=winner, loser=loser, important_only=True))

    overrides.sort(key=lambda o: (_key(o.loser), _key(o.winner)))
    logger.debug("Found %d override edge(s) among %d selector(s)", len(overrides), len(index.positions))
    return overrides
