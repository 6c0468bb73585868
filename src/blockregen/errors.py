"""Error types raised while loading preset configuration."""


class ParseError(Exception):
    """Raised when a configuration node cannot be turned into a model object.

    Wrapping code re-raises with a prefixed message (``raise ... from exc``)
    so nested failures read like a path, e.g.
    ``Failed to parse 'conditions': Invalid property 'foo'``.
    """

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)


class FormulaError(ParseError):
    """Raised when a formula cannot be parsed or evaluated."""
