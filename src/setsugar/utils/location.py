"""Source locations for error reporting."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Location:
    """Position of a character in the input formula."""

    line: int
    column: int
    file: str | None = None

    def __str__(self) -> str:
        if self.file:
            return f"{self.file}:{self.line}:{self.column}"
        return f"line {self.line}, column {self.column}"
