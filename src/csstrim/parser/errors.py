"""Parser error types."""


class ParseError(Exception):
    """Raised when stylesheet source cannot be parsed."""

    def __init__(
        self, message: str, line: int | None = None, column: int | None = None
    ):
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)


class SelectorError(ParseError):
    """Raised when a selector uses syntax outside the supported subset."""
