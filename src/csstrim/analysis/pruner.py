"""Rule pruner: drops rules left without selectors or declarations."""

from __future__ import annotations

import logging

from csstrim.model.stylesheet import Rule, Stylesheet

logger = logging.getLogger("csstrim.analysis")


def prune_empty_rules(stylesheet: Stylesheet) -> int:
    """Remove empty rules in place; return how many were removed."""
    before = len(stylesheet.nodes)
    stylesheet.nodes = [
        node for node in stylesheet.nodes if not (isinstance(node, Rule) and node.is_empty())
    ]
    removed = before - len(stylesheet.nodes)
    if removed:
        logger.debug("Pruned %d empty rule(s)", removed)
    return removed
