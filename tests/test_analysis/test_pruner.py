"""Tests for the rule pruner."""

from csstrim.analysis import prune_empty_rules
from csstrim.model.stylesheet import AtRule, Comment, Declaration, Rule, Stylesheet


class TestPrune:
    def test_removes_empty_rules_keeps_order(self):
        keep_a = Rule(selectors=[".a"], declarations=[Declaration("color", "red")])
        keep_b = Rule(selectors=[".b"], declarations=[Declaration("color", "blue")])
        media = AtRule(name="media", text="@media print{}")
        note = Comment(text=" note ")
        ss = Stylesheet(
            nodes=[
                Rule(selectors=[], declarations=[Declaration("color", "red")]),
                keep_a,
                note,
                Rule(selectors=[".c"], declarations=[]),
                media,
                keep_b,
            ]
        )
        assert prune_empty_rules(ss) == 2
        assert ss.nodes == [keep_a, note, media, keep_b]

    def test_nothing_to_prune(self):
        ss = Stylesheet(nodes=[Comment(text="x")])
        assert prune_empty_rules(ss) == 0
