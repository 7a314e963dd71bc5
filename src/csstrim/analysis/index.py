"""Candidate indexer: groups selectors that could stand in an override relation."""

from __future__ import annotations

import json
from collections import defaultdict
from dataclasses import dataclass, field

from csstrim.model.selector import Selector
from csstrim.model.stylesheet import Rule, Stylesheet
from csstrim.parser.selector import try_parse_selector


def selector_signature(selector: Selector, always_matches: frozenset[str]) -> str:
    """Sorted ``.class``/tag/``#id`` tokens of the whole chain minus the always-set ones.

    Two selectors can only override each other when their signatures are equal.
    """
    return json.dumps(sorted(selector.tokens() - always_matches))


@dataclass(frozen=True)
class Position:
    """Where a selector sits: node index in the stylesheet, index in its rule."""

    rule_pos: int
    selector_pos: int
    selector: Selector
    signature: str

    @property
    def text(self) -> str:
        return self.selector.text


@dataclass
class CandidateIndex:
    positions: list[Position] = field(default_factory=list)
    buckets: dict[str, list[Position]] = field(default_factory=lambda: defaultdict(list))

    @classmethod
    def build(cls, stylesheet: Stylesheet, always_matches: frozenset[str]) -> CandidateIndex:
        index = cls()
        for rule_pos, node in enumerate(stylesheet.nodes):
            if not isinstance(node, Rule):
                continue
            for selector_pos, text in enumerate(node.selectors):
                selector = try_parse_selector(text)
                if selector is None:
                    continue
                position = Position(
                    rule_pos=rule_pos,
                    selector_pos=selector_pos,
                    selector=selector,
                    signature=selector_signature(selector, always_matches),
                )
                index.positions.append(position)
                index.buckets[position.signature].append(position)
        return index

    def candidates(self, position: Position) -> list[Position]:
        return self.buckets.get(position.signature, [])
