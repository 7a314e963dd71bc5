from csstrim.parser.errors import ParseError, SelectorError
from csstrim.parser.selector import parse_selector, try_parse_selector
from csstrim.parser.stylesheet import parse_stylesheet, serialize_stylesheet

__all__ = [
    "ParseError",
    "SelectorError",
    "parse_selector",
    "try_parse_selector",
    "parse_stylesheet",
    "serialize_stylesheet",
]
