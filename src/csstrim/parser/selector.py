"""Selector parser: turns one selector string into a key-first compound chain.

Supported syntax:
    type and universal selectors, ``.class``, ``#id``,
    ``[attr]`` / ``[attr op value flag]``, ``:pseudo``, ``:pseudo(args)``,
    ``::element`` and the combinators `` ``, ``>``, ``+``, ``~``.

Namespaces, the column combinator and nesting (``&``) raise
:class:`SelectorError`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache

import tinycss2

from csstrim.model.selector import (
    AttributeMatch,
    CompoundSelector,
    NestingOperator,
    PseudoMatch,
    Selector,
)
from csstrim.parser.errors import SelectorError

__all__ = ["parse_selector", "split_selector_list", "try_parse_selector"]

logger = logging.getLogger("csstrim.parser")

_COMBINATORS = {
    ">": NestingOperator.CHILD,
    "+": NestingOperator.SIBLING_ADJACENT,
    "~": NestingOperator.SIBLING_GENERAL,
}

_ATTRIBUTE_OPERATORS = frozenset({"=", "~=", "|=", "^=", "$=", "*="})

_SKIPPED = ("whitespace", "comment")


@dataclass
class _Parts:
    """Mutable accumulator for one compound while tokens are consumed."""

    operator: NestingOperator
    tag: str | None = None
    id: str | None = None
    classes: set[str] = field(default_factory=set)
    attributes: set[AttributeMatch] = field(default_factory=set)
    pseudos: set[PseudoMatch] = field(default_factory=set)

    def is_empty(self) -> bool:
        return not (
            self.tag or self.id or self.classes or self.attributes or self.pseudos
        )


def _compact(tokens) -> str:
    """Serialize tokens with every whitespace run collapsed to one space."""
    out = []
    for token in tokens:
        if token.type == "comment":
            continue
        out.append(" " if token.type == "whitespace" else token.serialize())
    return "".join(out).strip()


def split_selector_list(tokens) -> list[str]:
    """Split a rule prelude on top-level commas into selector strings."""
    groups: list[list] = [[]]
    for token in tokens:
        if token.type == "literal" and token.value == ",":
            groups.append([])
        else:
            groups[-1].append(token)
    return [_compact(group) for group in groups if _compact(group)]


def _parse_attribute(block, text: str) -> AttributeMatch:
    items = [t for t in block.content if t.type not in _SKIPPED]
    if not items or items[0].type != "ident":
        raise SelectorError(f"Invalid attribute selector in {text!r}")
    name = items[0].lower_value
    if len(items) == 1:
        return AttributeMatch(name=name)

    # Operators may arrive as one literal ("~=") or as two ("~", "=").
    index = 1
    operator = ""
    while index < len(items) and items[index].type == "literal" and not operator.endswith("="):
        operator += items[index].value
        index += 1
    if operator not in _ATTRIBUTE_OPERATORS:
        raise SelectorError(f"Unsupported attribute operator {operator!r} in {text!r}")

    if index >= len(items) or items[index].type not in ("ident", "string"):
        raise SelectorError(f"Missing attribute value in {text!r}")
    value = items[index].value
    index += 1

    flags = None
    if index < len(items) and items[index].type == "ident":
        flags = items[index].lower_value
        index += 1
    if index != len(items):
        raise SelectorError(f"Invalid attribute selector in {text!r}")
    return AttributeMatch(name=name, operator=operator, value=value, flags=flags)


def _consume_simple(tokens: list, index: int, parts: _Parts, text: str) -> int:
    """Consume one simple selector starting at *index*; return the next index."""
    token = tokens[index]

    if token.type == "ident" or (token.type == "literal" and token.value == "*"):
        if not parts.is_empty():
            raise SelectorError(f"Type selector must come first in a compound: {text!r}")
        if index + 1 < len(tokens) and tokens[index + 1].type == "literal" and tokens[index + 1].value == "|":
            raise SelectorError(f"Namespaced selectors are not supported: {text!r}")
        # "*" is kept as a tag: it still requires an element to exist.
        parts.tag = token.lower_value if token.type == "ident" else "*"
        return index + 1

    if token.type == "hash":
        if not token.is_identifier or parts.id is not None:
            raise SelectorError(f"Invalid id selector in {text!r}")
        parts.id = token.value
        return index + 1

    if token.type == "[] block":
        parts.attributes.add(_parse_attribute(token, text))
        return index + 1

    if token.type == "literal" and token.value == ".":
        following = tokens[index + 1] if index + 1 < len(tokens) else None
        if following is None or following.type != "ident":
            raise SelectorError(f"Invalid class selector in {text!r}")
        parts.classes.add(following.value)
        return index + 2

    if token.type == "literal" and token.value == ":":
        prefix = ":"
        index += 1
        if index < len(tokens) and tokens[index].type == "literal" and tokens[index].value == ":":
            prefix = "::"
            index += 1
        following = tokens[index] if index < len(tokens) else None
        if following is not None and following.type == "ident":
            parts.pseudos.add(PseudoMatch(name=prefix + following.lower_value))
        elif following is not None and following.type == "function":
            parts.pseudos.add(
                PseudoMatch(name=prefix + following.lower_name, argument=_compact(following.arguments))
            )
        else:
            raise SelectorError(f"Invalid pseudo selector in {text!r}")
        return index + 1

    raise SelectorError(f"Unsupported token {token.serialize()!r} in selector {text!r}")


def _link(chain: list[_Parts]) -> CompoundSelector:
    """Freeze the written (left-to-right) compounds into a key-first chain."""
    node: CompoundSelector | None = None
    for parts in chain:
        node = CompoundSelector(
            tag=parts.tag,
            id=parts.id,
            classes=frozenset(parts.classes),
            attributes=frozenset(parts.attributes),
            pseudos=frozenset(parts.pseudos),
            operator=parts.operator if node is not None else NestingOperator.NONE,
            parent=node,
        )
    assert node is not None
    return node


def parse_selector(text: str) -> Selector:
    """Parse a single complex selector such as ``.nav > li a:hover``."""
    tokens = tinycss2.parse_component_value_list(text, skip_comments=True)
    if any(t.type == "error" for t in tokens):
        raise SelectorError(f"Malformed selector {text!r}")

    chain: list[_Parts] = []
    combinator: NestingOperator | None = None
    whitespace = False
    index = 0
    while index < len(tokens):
        token = tokens[index]
        if token.type == "whitespace":
            whitespace = True
            index += 1
            continue
        if token.type == "literal" and token.value in _COMBINATORS:
            if not chain or combinator is not None:
                raise SelectorError(f"Misplaced combinator {token.value!r} in {text!r}")
            combinator = _COMBINATORS[token.value]
            whitespace = False
            index += 1
            continue
        if token.type == "literal" and token.value == ",":
            raise SelectorError(f"Expected a single selector, got a list: {text!r}")

        if not chain or combinator is not None or whitespace:
            chain.append(_Parts(operator=combinator or NestingOperator.NONE))
            combinator = None
            whitespace = False
        index = _consume_simple(tokens, index, chain[-1], text)

    if not chain:
        raise SelectorError("Empty selector")
    if combinator is not None:
        raise SelectorError(f"Selector ends with a combinator: {text!r}")
    return Selector(text=text.strip(), key=_link(chain))


@lru_cache(maxsize=4096)
def try_parse_selector(text: str) -> Selector | None:
    """Parse *text*, returning None for selectors outside the supported subset.

    Analysis phases leave such selectors untouched.
    """
    try:
        return parse_selector(text)
    except SelectorError as exc:
        logger.debug("Skipping selector %r: %s", text, exc)
        return None
