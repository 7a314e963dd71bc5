"""Engine entry point: one analysis pass over one stylesheet."""

from __future__ import annotations

import logging

from csstrim.analysis import (
    CandidateIndex,
    find_overrides,
    prune_empty_rules,
    reduce_overridden,
    remove_dead_selectors,
    remove_misplaced_root_selectors,
)
from csstrim.config import Action, Config
from csstrim.diagnostics import DiagnosticsController, Report
from csstrim.model.stylesheet import Stylesheet

logger = logging.getLogger("csstrim.engine")


def analyze(stylesheet: Stylesheet, config: Config | None = None) -> Report:
    """Run every enabled check over *stylesheet*, mutating it in place.

    Phases run in order: dead selectors, misplaced root tags, overrides,
    then pruning of emptied rules. A check whose policy is ``ignore`` is
    skipped entirely.

    Returns the run's :class:`Report`. Raises
    :class:`~csstrim.diagnostics.AnalysisError` after the whole pass if any
    finding was classified as an error; removals made by ``remove`` policies
    in the same run are kept.
    """
    config = config or Config()
    diagnostics = DiagnosticsController(max_reported=config.max_reported)
    logger.debug("Analyzing %d node(s)", len(stylesheet.nodes))

    if config.on_dead_selector is not Action.IGNORE:
        remove_dead_selectors(stylesheet, config.never_matches, config.on_dead_selector, diagnostics)

    if config.on_invalid_body_position is not Action.IGNORE:
        remove_misplaced_root_selectors(stylesheet, config.on_invalid_body_position, diagnostics)

    if config.on_override is not Action.IGNORE:
        index = CandidateIndex.build(stylesheet, config.always_matches)
        overrides = find_overrides(stylesheet, index, config.always_matches)
        reduce_overridden(stylesheet, overrides, config.on_override, diagnostics)

    prune_empty_rules(stylesheet)
    return diagnostics.finish()
