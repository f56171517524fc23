"""Error types shared by the lexer, parser and pipeline."""

from setsugar.utils.location import Location


class SetSugarError(Exception):
    """Base class for user-facing errors.

    Lexical and parse errors carry the location of the offending input;
    the message is prefixed with it when one is known.
    """

    location: Location | None

    def __init__(self, message: str, location: Location | None = None):
        if location is not None:
            super().__init__(f"{location}: {message}")
        else:
            super().__init__(message)
        self.message = message
        self.location = location


class FormulaTooDeepError(SetSugarError):
    """Formula nested deeper than the recursive passes can follow."""

    def __init__(self, location: Location | None = None):
        super().__init__("Formula nested too deeply", location)
