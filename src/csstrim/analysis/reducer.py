"""Declaration reducer: removes what an override proof shows is always masked."""

from __future__ import annotations

import logging
from collections import defaultdict

from csstrim.analysis.override import Override
from csstrim.config import Action
from csstrim.diagnostics import DiagnosticsController
from csstrim.model.diagnostic import FindingKind
from csstrim.model.stylesheet import Declaration, Rule, Stylesheet

logger = logging.getLogger("csstrim.analysis")


def masks(winner: Rule, decl: Declaration, important_only: bool = False) -> bool:
    """True if *winner* re-specifies ``decl.property`` with enough importance to win.

    A normal declaration never masks an ``!important`` one.
    """
    found = False
    important = False
    for candidate in winner.declarations:
        if candidate.property == decl.property:
            found = True
            important = important or candidate.important
    if not found:
        return False
    if important_only:
        return important and not decl.important
    return important or not decl.important


def reduce_overridden(
    stylesheet: Stylesheet,
    overrides: list[Override],
    action: Action,
    diagnostics: DiagnosticsController,
) -> None:
    """Apply the override edges to the losing rules.

    For a selector group, a selector is dropped when one winner masks every
    declaration of the rule. A declaration is dropped when every remaining
    selector of its rule is masked for it; a single-selector rule is the
    simplest case of this. All decisions are taken on the rules as they
    were before this pass.
    """
    nodes = stylesheet.nodes
    by_loser: dict[int, dict[int, list[Override]]] = defaultdict(lambda: defaultdict(list))
    for edge in overrides:
        by_loser[edge.loser.rule_pos][edge.loser.selector_pos].append(edge)

    drop_selectors: dict[int, set[int]] = defaultdict(set)
    drop_declarations: dict[int, set[int]] = defaultdict(set)

    for rule_pos in sorted(by_loser):
        rule = nodes[rule_pos]
        assert isinstance(rule, Rule)
        edges = by_loser[rule_pos]
        reported: set[int] = set()

        if len(rule.selectors) > 1:
            for selector_pos in sorted(edges):
                for edge in edges[selector_pos]:
                    winner = nodes[edge.winner.rule_pos]
                    assert isinstance(winner, Rule)
                    if not all(masks(winner, decl, edge.important_only) for decl in rule.declarations):
                        continue
                    reported.add(selector_pos)
                    if diagnostics.report(
                        FindingKind.OVERRIDDEN_SELECTOR,
                        action,
                        "Selector $1 always overrides all properties of $2",
                        edge.winner.text,
                        edge.loser.text,
                    ):
                        drop_selectors[rule_pos].add(selector_pos)
                    break

        surviving = [j for j in range(len(rule.selectors)) if j not in drop_selectors[rule_pos]]
        if not surviving:
            continue
        if all(j in reported for j in surviving):
            # Every remaining selector was already reported as a whole.
            continue

        for decl_pos, decl in enumerate(rule.declarations):
            proofs: list[Override] = []
            for selector_pos in surviving:
                proof = next(
                    (
                        edge
                        for edge in edges.get(selector_pos, [])
                        if masks(nodes[edge.winner.rule_pos], decl, edge.important_only)
                    ),
                    None,
                )
                if proof is None:
                    break
                proofs.append(proof)
            else:
                if diagnostics.report(
                    FindingKind.OVERRIDDEN_DECLARATION,
                    action,
                    "Selector $1 always overrides property $2 of $3",
                    proofs[0].winner.text,
                    decl.property,
                    ", ".join(rule.selectors[j] for j in surviving),
                ):
                    drop_declarations[rule_pos].add(decl_pos)

    for rule_pos, dropped in drop_selectors.items():
        rule = nodes[rule_pos]
        rule.selectors = [s for j, s in enumerate(rule.selectors) if j not in dropped]
    for rule_pos, dropped in drop_declarations.items():
        rule = nodes[rule_pos]
        rule.declarations = [d for k, d in enumerate(rule.declarations) if k not in dropped]
        logger.debug("Removed %d declaration(s) from rule %d", len(dropped), rule_pos)
