"""Body-position validator: root-element tags can only sit at the top of a chain."""

from __future__ import annotations

import logging

from csstrim.config import Action
from csstrim.diagnostics import DiagnosticsController
from csstrim.model.diagnostic import FindingKind
from csstrim.model.selector import CompoundSelector, PseudoMatch, Selector
from csstrim.model.stylesheet import Rule, Stylesheet
from csstrim.parser.selector import try_parse_selector

logger = logging.getLogger("csstrim.analysis")

# Root tag -> tags allowed anywhere among its ancestors / preceding siblings.
ROOT_TAGS: dict[str, frozenset[str]] = {
    "html": frozenset(),
    "body": frozenset({"html", "head"}),
}

_ROOT = PseudoMatch(name=":root")


def _may_enclose(ancestor: CompoundSelector, allowed: frozenset[str]) -> bool:
    if ancestor.tag in allowed:
        return True
    # A bare "*" or ":root" can stand for the document element itself.
    bare = not (ancestor.id or ancestor.classes or ancestor.attributes)
    return bool(allowed) and bare and (ancestor.tag == "*" or _ROOT in ancestor.pseudos)


def _is_misplaced(compound: CompoundSelector) -> bool:
    allowed = ROOT_TAGS.get(compound.tag or "")
    if allowed is None:
        return False
    return not all(_may_enclose(ancestor, allowed) for ancestor in compound.ancestors())


def misplaced_root_tag(selector: Selector) -> str | None:
    """Return the first root tag written below a foreign ancestor, e.g. ``body`` in ``.y body``."""
    for compound in selector.compounds():
        if _is_misplaced(compound):
            return compound.tag
    return None


def remove_misplaced_root_selectors(
    stylesheet: Stylesheet,
    action: Action,
    diagnostics: DiagnosticsController,
) -> None:
    for node in stylesheet.nodes:
        if not isinstance(node, Rule):
            continue
        kept: list[str] = []
        for text in node.selectors:
            selector = try_parse_selector(text)
            tag = misplaced_root_tag(selector) if selector is not None else None
            if tag is not None and diagnostics.report(
                FindingKind.INVALID_BODY_POSITION,
                action,
                "Selector $1 can never match, $2 must be the outermost element",
                text,
                tag,
            ):
                logger.debug("Removed selector %r with misplaced %s", text, tag)
                continue
            kept.append(text)
        node.selectors = kept
