"""Stylesheet model: Rule, AtRule, Comment and Declaration nodes."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Union

_IMPORTANT_RE = re.compile(r"!\s*important\b", re.IGNORECASE)


@dataclass
class Declaration:
    """A ``property: value`` pair; ``value`` keeps any ``!important`` marker."""

    property: str
    value: str

    @property
    def important(self) -> bool:
        return _IMPORTANT_RE.search(self.value) is not None


@dataclass
class Rule:
    """A selector group sharing one declaration block.

    Both lists are in cascade order and are only ever shortened.
    """

    selectors: list[str]
    declarations: list[Declaration] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.selectors or not self.declarations


@dataclass
class AtRule:
    """An at-rule kept verbatim (``@media``, ``@font-face``, ``@import``...)."""

    name: str
    text: str


@dataclass
class Comment:
    """A top-level ``/* ... */`` comment, text without the delimiters."""

    text: str


Node = Union[Rule, AtRule, Comment]


@dataclass
class Stylesheet:
    """Top-level nodes in cascade order."""

    nodes: list[Node] = field(default_factory=list)

    @property
    def rules(self) -> list[Rule]:
        return [node for node in self.nodes if isinstance(node, Rule)]
