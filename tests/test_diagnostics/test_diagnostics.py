"""Tests for the diagnostics controller."""

import logging

import pytest

from csstrim.config import Action
from csstrim.diagnostics import AnalysisError, DiagnosticsController
from csstrim.model.diagnostic import FindingKind, Severity

DEAD = FindingKind.DEAD_SELECTOR


class TestReport:
    def test_ignore_changes_nothing(self):
        ctl = DiagnosticsController()
        assert ctl.report(DEAD, Action.IGNORE, "Selector $1 is never used", ".x") is False
        assert (ctl.error_count, ctl.warn_count, ctl.remove_count) == (0, 0, 0)
        assert ctl.diagnostics == []

    def test_warn_withholds_mutation(self):
        ctl = DiagnosticsController()
        assert ctl.report(DEAD, Action.WARN, "Selector $1 is never used", ".x") is False
        assert ctl.warn_count == 1
        assert ctl.diagnostics[0].severity is Severity.WARNING

    def test_error_withholds_mutation(self):
        ctl = DiagnosticsController()
        assert ctl.report(DEAD, Action.ERROR, "Selector $1 is never used", ".x") is False
        assert ctl.error_count == 1
        assert ctl.diagnostics[0].is_error

    def test_remove_applies_mutation(self):
        ctl = DiagnosticsController()
        assert ctl.report(DEAD, Action.REMOVE, "Selector $1 is never used", ".x") is True
        assert ctl.remove_count == 1
        assert ctl.diagnostics[0].severity is Severity.INFO

    def test_findings_are_logged(self, caplog):
        ctl = DiagnosticsController()
        with caplog.at_level(logging.INFO, logger="csstrim"):
            ctl.report(DEAD, Action.WARN, "Selector $1 is never used", ".x")
        assert "Selector [.x] is never used" in caplog.text


class TestBudget:
    def test_cap_limits_rendered_findings(self):
        ctl = DiagnosticsController(max_reported=2)
        for name in (".a", ".b", ".c"):
            ctl.report(DEAD, Action.WARN, "Selector $1 is never used", name)
        assert ctl.warn_count == 3
        assert [d.args for d in ctl.diagnostics] == [(".a",), (".b",)]

    def test_zero_budget(self):
        ctl = DiagnosticsController(max_reported=0)
        assert ctl.report(DEAD, Action.REMOVE, "Selector $1 is never used", ".a") is True
        assert ctl.diagnostics == []
        assert ctl.remove_count == 1

    def test_finish_summarizes_suppressed(self, caplog):
        ctl = DiagnosticsController(max_reported=1)
        for name in (".a", ".b", ".c"):
            ctl.report(DEAD, Action.WARN, "Selector $1 is never used", name)
        with caplog.at_level(logging.WARNING, logger="csstrim"):
            report = ctl.finish()
        assert "2 more warnings..." in caplog.text
        assert report.unreported == 2


class TestFinish:
    def test_returns_report_without_errors(self):
        ctl = DiagnosticsController()
        ctl.report(DEAD, Action.WARN, "Selector $1 is never used", ".a")
        report = ctl.finish()
        assert report.warn_count == 1
        assert len(report.diagnostics) == 1

    def test_raises_after_errors(self):
        ctl = DiagnosticsController()
        ctl.report(DEAD, Action.ERROR, "Selector $1 is never used", ".a")
        ctl.report(DEAD, Action.ERROR, "Selector $1 is never used", ".b")
        ctl.report(DEAD, Action.REMOVE, "Selector $1 is never used", ".c")
        with pytest.raises(AnalysisError) as info:
            ctl.finish()
        assert info.value.report.error_count == 2
        assert info.value.report.remove_count == 1
        assert "2 error(s)" in str(info.value)
