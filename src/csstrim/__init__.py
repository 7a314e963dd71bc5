"""csstrim - build-time removal of provably overridden CSS."""

__version__ = "0.1.0"

from csstrim.config import Action, Config, ConfigError, load_config  # noqa: E402
from csstrim.diagnostics import AnalysisError, Report  # noqa: E402
from csstrim.engine import analyze  # noqa: E402
from csstrim.parser import ParseError, parse_stylesheet, serialize_stylesheet  # noqa: E402

__all__ = [
    "__version__",
    "Action",
    "Config",
    "ConfigError",
    "load_config",
    "AnalysisError",
    "Report",
    "analyze",
    "ParseError",
    "parse_stylesheet",
    "serialize_stylesheet",
]
