"""Dead-selector filter: drops selectors that use a never-matching simple selector."""

from __future__ import annotations

import logging

from csstrim.config import Action
from csstrim.diagnostics import DiagnosticsController
from csstrim.model.diagnostic import FindingKind
from csstrim.model.selector import Selector
from csstrim.model.stylesheet import Rule, Stylesheet
from csstrim.parser.selector import try_parse_selector

logger = logging.getLogger("csstrim.analysis")


def uses_any_of(selector: Selector, never_matches: frozenset[str]) -> bool:
    """True if any compound of the chain, key or ancestor, names one of *never_matches*.

    Arguments of functional pseudos (``:not(.x)``) are not inspected.
    """
    return any(compound.tokens() & never_matches for compound in selector.compounds())


def remove_dead_selectors(
    stylesheet: Stylesheet,
    never_matches: frozenset[str],
    action: Action,
    diagnostics: DiagnosticsController,
) -> None:
    if not never_matches:
        return
    for node in stylesheet.nodes:
        if not isinstance(node, Rule):
            continue
        kept: list[str] = []
        for text in node.selectors:
            selector = try_parse_selector(text)
            if selector is not None and uses_any_of(selector, never_matches):
                if diagnostics.report(
                    FindingKind.DEAD_SELECTOR, action, "Selector $1 is never used", text
                ):
                    logger.debug("Removed dead selector %r", text)
                    continue
            kept.append(text)
        node.selectors = kept
