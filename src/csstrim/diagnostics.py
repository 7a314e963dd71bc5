"""Diagnostics controller: applies per-check policies and caps reporting."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from csstrim.config import Action
from csstrim.model.diagnostic import Diagnostic, FindingKind, Severity

logger = logging.getLogger("csstrim.diagnostics")

_SEVERITY = {
    Action.ERROR: Severity.ERROR,
    Action.WARN: Severity.WARNING,
    Action.REMOVE: Severity.INFO,
}

_LOG_LEVEL = {
    Severity.ERROR: logging.ERROR,
    Severity.WARNING: logging.WARNING,
    Severity.INFO: logging.INFO,
}


@dataclass
class Report:
    """Outcome of one analysis run."""

    diagnostics: list[Diagnostic] = field(default_factory=list)
    error_count: int = 0
    warn_count: int = 0
    remove_count: int = 0

    @property
    def unreported(self) -> int:
        return self.error_count + self.warn_count + self.remove_count - len(self.diagnostics)


class AnalysisError(Exception):
    """Raised at the end of a run when any finding was classified as an error.

    Removals made during the same run have already been applied.
    """

    def __init__(self, report: Report) -> None:
        self.report = report
        self.diagnostics = report.diagnostics
        super().__init__(
            f"Analysis failed with {report.error_count} error(s), see the log for details"
        )


class DiagnosticsController:
    """Routes every finding of a run through its check's policy.

    One controller is created per run. ``report`` tells the caller whether
    the mutation may be applied; ``finish`` closes the run and raises
    :class:`AnalysisError` if any error was recorded.
    """

    def __init__(self, max_reported: int = 20) -> None:
        self._budget = max_reported
        self._report = Report()

    @property
    def error_count(self) -> int:
        return self._report.error_count

    @property
    def warn_count(self) -> int:
        return self._report.warn_count

    @property
    def remove_count(self) -> int:
        return self._report.remove_count

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return list(self._report.diagnostics)

    def report(self, kind: FindingKind, action: Action, template: str, *args: str) -> bool:
        """Record one finding; return True if the mutation should be applied."""
        if action is Action.IGNORE:
            return False

        if action is Action.ERROR:
            self._report.error_count += 1
        elif action is Action.WARN:
            self._report.warn_count += 1
        else:
            self._report.remove_count += 1

        if self._budget > 0:
            self._budget -= 1
            diagnostic = Diagnostic(kind=kind, severity=_SEVERITY[action], template=template, args=args)
            self._report.diagnostics.append(diagnostic)
            logger.log(_LOG_LEVEL[diagnostic.severity], "%s", diagnostic)

        return action is Action.REMOVE

    def finish(self) -> Report:
        """Summarize suppressed findings and fail the run if errors were found."""
        report = self._report
        shown = {severity: 0 for severity in Severity}
        for diagnostic in report.diagnostics:
            shown[diagnostic.severity] += 1

        for count, severity, noun in (
            (report.error_count, Severity.ERROR, "errors"),
            (report.warn_count, Severity.WARNING, "warnings"),
            (report.remove_count, Severity.INFO, "removals"),
        ):
            if count > shown[severity]:
                logger.log(_LOG_LEVEL[severity], "%d more %s...", count - shown[severity], noun)

        if report.error_count > 0:
            raise AnalysisError(report)
        return report
