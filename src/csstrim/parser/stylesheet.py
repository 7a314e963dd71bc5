"""Stylesheet adapter: CSS text <-> Stylesheet model, built on tinycss2.

Only top-level qualified rules are broken down into selectors and
declarations. At-rules (including ``@media`` blocks and everything nested in
them) are carried through verbatim.
"""

from __future__ import annotations

import re

import tinycss2

from csstrim.model.stylesheet import AtRule, Comment, Declaration, Rule, Stylesheet
from csstrim.parser.errors import ParseError
from csstrim.parser.selector import split_selector_list

__all__ = ["parse_stylesheet", "serialize_stylesheet"]

_COMPACT_IMPORTANT_RE = re.compile(r"\s*!\s*important\s*$", re.IGNORECASE)


def _error(node) -> ParseError:
    return ParseError(node.message, line=node.source_line, column=node.source_column)


def _parse_declarations(content) -> list[Declaration]:
    declarations: list[Declaration] = []
    for node in tinycss2.parse_declaration_list(content, skip_comments=True, skip_whitespace=True):
        if node.type == "error":
            raise _error(node)
        if node.type != "declaration":
            raise ParseError(
                f"Unexpected {node.type} inside a declaration block",
                line=node.source_line,
                column=node.source_column,
            )
        # Custom property names are case-sensitive.
        name = node.name if node.name.startswith("--") else node.lower_name
        value = tinycss2.serialize(node.value).strip()
        if node.important:
            value += " !important"
        declarations.append(Declaration(property=name, value=value))
    return declarations


def parse_stylesheet(source: str) -> Stylesheet:
    """Parse CSS source into a Stylesheet, keeping nodes in source order.

    Raises :class:`ParseError` on malformed rules or declarations.
    """
    nodes = []
    for node in tinycss2.parse_stylesheet(source, skip_comments=False, skip_whitespace=True):
        if node.type == "qualified-rule":
            selectors = split_selector_list(node.prelude)
            if not selectors:
                raise ParseError("Rule without a selector", line=node.source_line, column=node.source_column)
            nodes.append(Rule(selectors=selectors, declarations=_parse_declarations(node.content)))
        elif node.type == "at-rule":
            nodes.append(AtRule(name=node.lower_at_keyword, text=node.serialize()))
        elif node.type == "comment":
            nodes.append(Comment(text=node.value))
        elif node.type == "error":
            raise _error(node)
    return Stylesheet(nodes=nodes)


def _compact_value(value: str) -> str:
    return _COMPACT_IMPORTANT_RE.sub("!important", value)


def serialize_stylesheet(stylesheet: Stylesheet, compress: bool = False) -> str:
    """Render a Stylesheet back to CSS text.

    With ``compress`` the output has no optional whitespace and no comments,
    e.g. ``.a,.b{color:red;}``.
    """
    parts: list[str] = []
    for node in stylesheet.nodes:
        if isinstance(node, Rule):
            if compress:
                body = "".join(f"{d.property}:{_compact_value(d.value)};" for d in node.declarations)
                parts.append(",".join(node.selectors) + "{" + body + "}")
            else:
                body = "".join(f"  {d.property}: {d.value};\n" for d in node.declarations)
                parts.append(",\n".join(node.selectors) + " {\n" + body + "}")
        elif isinstance(node, AtRule):
            parts.append(node.text)
        elif isinstance(node, Comment):
            if not compress:
                parts.append(f"/*{node.text}*/")
    if compress:
        return "".join(parts)
    return "\n\n".join(parts) + ("\n" if parts else "")
