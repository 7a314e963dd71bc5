"""Tests for the stylesheet, selector and diagnostic models."""

import pytest

from csstrim.model import (
    CompoundSelector,
    Declaration,
    Diagnostic,
    FindingKind,
    NestingOperator,
    Rule,
    Selector,
    Severity,
)


class TestDeclaration:
    @pytest.mark.parametrize(
        "value,important",
        [
            ("red", False),
            ("red !important", True),
            ("red!important", True),
            ("red ! IMPORTANT", True),
            ("url(important.png)", False),
        ],
    )
    def test_important_flag(self, value, important):
        assert Declaration("color", value).important is important


class TestRule:
    def test_empty_without_selectors(self):
        assert Rule(selectors=[], declarations=[Declaration("color", "red")]).is_empty()

    def test_empty_without_declarations(self):
        assert Rule(selectors=[".a"]).is_empty()

    def test_not_empty(self):
        assert not Rule(selectors=[".a"], declarations=[Declaration("color", "red")]).is_empty()


class TestCompoundSelector:
    def test_structural_equality_ignores_class_order(self):
        a = CompoundSelector(classes=frozenset({"x", "y"}))
        b = CompoundSelector(classes=frozenset({"y", "x"}))
        assert a == b

    def test_frozen(self):
        with pytest.raises(AttributeError):
            CompoundSelector().tag = "div"  # type: ignore[misc]

    def test_ancestors(self):
        root = CompoundSelector(tag="html")
        mid = CompoundSelector(classes=frozenset({"a"}), parent=root)
        key = CompoundSelector(tag="p", operator=NestingOperator.CHILD, parent=mid)
        assert list(key.ancestors()) == [mid, root]
        assert list(Selector(text="html .a > p", key=key).compounds()) == [key, mid, root]


class TestDiagnostic:
    def test_message_fills_placeholders(self):
        diag = Diagnostic(
            kind=FindingKind.OVERRIDDEN_DECLARATION,
            severity=Severity.WARNING,
            template="Selector $1 always overrides property $2 of $3",
            args=(".b", "color", ".a"),
        )
        assert diag.message == "Selector [.b] always overrides property [color] of [.a]"
        assert str(diag) == f"WARNING [overridden_declaration]: {diag.message}"
        assert diag.is_warning
        assert not diag.is_error
