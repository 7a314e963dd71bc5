"""csstrim model layer -- public type re-exports."""

from csstrim.model.diagnostic import Diagnostic, FindingKind, Severity
from csstrim.model.selector import (
    EMPTY_COMPOUND,
    AttributeMatch,
    CompoundSelector,
    NestingOperator,
    PseudoMatch,
    Selector,
)
from csstrim.model.stylesheet import AtRule, Comment, Declaration, Node, Rule, Stylesheet

__all__ = [
    # selector
    "NestingOperator",
    "AttributeMatch",
    "PseudoMatch",
    "CompoundSelector",
    "EMPTY_COMPOUND",
    "Selector",
    # stylesheet
    "Declaration",
    "Rule",
    "AtRule",
    "Comment",
    "Node",
    "Stylesheet",
    # diagnostic
    "Severity",
    "FindingKind",
    "Diagnostic",
]
