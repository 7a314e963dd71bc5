"""Analysis phases, in the order the engine runs them."""

from csstrim.analysis.body import remove_misplaced_root_selectors
from csstrim.analysis.dead import remove_dead_selectors
from csstrim.analysis.index import CandidateIndex, Position, selector_signature
from csstrim.analysis.override import Override, always_covers, always_overrides, find_overrides
from csstrim.analysis.pruner import prune_empty_rules
from csstrim.analysis.reducer import reduce_overridden

__all__ = [
    "remove_dead_selectors",
    "remove_misplaced_root_selectors",
    "CandidateIndex",
    "Position",
    "selector_signature",
    "Override",
    "always_overrides",
    "always_covers",
    "find_overrides",
    "reduce_overridden",
    "prune_empty_rules",
]
