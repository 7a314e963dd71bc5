"""Tests for the dead-selector filter."""

import pytest

from csstrim.analysis import remove_dead_selectors
from csstrim.analysis.dead import uses_any_of
from csstrim.config import Action
from csstrim.diagnostics import DiagnosticsController
from csstrim.model.diagnostic import FindingKind
from csstrim.parser import parse_selector, parse_stylesheet

NEVER = frozenset({".x"})


class TestUsesAnyOf:
    @pytest.mark.parametrize(
        "text", [".x", ".x .abc", ".abc .x", ".abc .x.y", ".abc .y.x", "div > .x + p"]
    )
    def test_anywhere_in_chain(self, text):
        assert uses_any_of(parse_selector(text), NEVER)

    @pytest.mark.parametrize("text", [".y:not(.x)", "div", "#other", "#x", "[class=x]"])
    def test_not_used(self, text):
        assert not uses_any_of(parse_selector(text), NEVER)

    def test_ids_and_tags(self):
        assert uses_any_of(parse_selector(".a #legacy"), frozenset({"#legacy"}))
        assert uses_any_of(parse_selector("marquee.a"), frozenset({"marquee"}))


class TestRemoveDeadSelectors:
    def test_removes_selector_from_group(self):
        ss = parse_stylesheet(".x, .other { color: red; }")
        ctl = DiagnosticsController()
        remove_dead_selectors(ss, NEVER, Action.REMOVE, ctl)
        assert ss.rules[0].selectors == [".other"]
        assert ctl.remove_count == 1

    def test_leaves_empty_rule_for_pruner(self):
        ss = parse_stylesheet(".x { color: red; }")
        remove_dead_selectors(ss, NEVER, Action.REMOVE, DiagnosticsController())
        assert ss.rules[0].selectors == []

    def test_warn_keeps_selector(self):
        ss = parse_stylesheet(".x .abc { color: red; }")
        ctl = DiagnosticsController()
        remove_dead_selectors(ss, NEVER, Action.WARN, ctl)
        assert ss.rules[0].selectors == [".x .abc"]
        assert ctl.diagnostics[0].kind is FindingKind.DEAD_SELECTOR
        assert ctl.diagnostics[0].message == "Selector [.x .abc] is never used"

    def test_unparseable_selector_kept(self):
        ss = parse_stylesheet("ns|x, .x { color: red; }")
        remove_dead_selectors(ss, NEVER, Action.REMOVE, DiagnosticsController())
        assert ss.rules[0].selectors == ["ns|x"]
