"""Diagnostic model: structured findings produced while analyzing a stylesheet."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

_PLACEHOLDER_RE = re.compile(r"\$(\d)")


class Severity(Enum):
    """Severity level for a diagnostic message."""

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


class FindingKind(Enum):
    """The check that produced a finding."""

    DEAD_SELECTOR = "dead_selector"
    INVALID_BODY_POSITION = "invalid_body_position"
    OVERRIDDEN_SELECTOR = "overridden_selector"
    OVERRIDDEN_DECLARATION = "overridden_declaration"


@dataclass(frozen=True)
class Diagnostic:
    """A single finding about the stylesheet.

    Attributes:
        kind: The check that produced this diagnostic.
        severity: ERROR and WARNING findings were not applied; INFO ones were.
        template: Message with ``$1``..``$9`` placeholders for ``args``.
        args: Selector texts and property names the message refers to.
    """

    kind: FindingKind
    severity: Severity
    template: str
    args: tuple[str, ...] = ()

    @property
    def message(self) -> str:
        return _PLACEHOLDER_RE.sub(
            lambda m: "[" + self.args[int(m.group(1)) - 1] + "]", self.template
        )

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    def __str__(self) -> str:
        return f"{self.severity.value} [{self.kind.value}]: {self.message}"
