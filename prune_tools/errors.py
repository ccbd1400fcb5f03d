from __future__ import annotations

from typing import Optional


class ParseError(ValueError):
    """Malformed markup or stylesheet. The caller skips the file and keeps going."""

    def __init__(self, message: str, path: Optional[str] = None, line: Optional[int] = None, column: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.path = path
        self.line = line
        self.column = column

    def with_path(self, path) -> "ParseError":
        self.path = str(path)
        return self

    def __str__(self) -> str:
        where = self.path or ''
        if self.line is not None:
            where = f"{where}:{self.line}:{self.column}" if where else f"line {self.line}, column {self.column}"
        return f"{where}: {self.message}" if where else self.message
