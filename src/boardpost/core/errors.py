"""Errors raised while preprocessing and parsing post bodies"""


class RuleError(ValueError):
    """A configured filter rule has an invalid pattern or replacement template."""

    def __init__(self, pattern: str, cause: Exception):
        self.pattern = pattern
        self.cause = cause
        super().__init__(f"Invalid filter rule {pattern!r}: {cause}")


class ParseError(ValueError):
    """The grammar could not consume the whole (preprocessed) post body."""

    def __init__(self, text: str, position: int, expected: str = "a line item"):
        self.position = position
        self.line = text.count("\n", 0, position) + 1
        self.column = position - (text.rfind("\n", 0, position) + 1) + 1
        self.remainder = text[position:]
        snippet = self.remainder[:20]
        super().__init__(
            f"Could not parse post at line {self.line}, column {self.column}: "
            f"expected {expected}, found {snippet!r}"
        )
