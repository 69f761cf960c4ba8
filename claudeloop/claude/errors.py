"""Errors raised while running the claude command and reading its output."""

from __future__ import annotations

import json


def truncate_line(text: str, max_len: int) -> str:
    """Shorten *text* to *max_len* characters, ending it with "..." if cut."""
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


class ClaudeError(Exception):
    """A failed run of the claude command."""

    def __init__(
        self,
        message: str,
        *,
        result_text: str = "",
        stderr: str = "",
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.result_text = result_text
        self.stderr = stderr
        self.cause = cause
        self.__cause__ = cause

    def __str__(self) -> str:
        if self.result_text:
            return f"claude: {self.message}: {self.result_text}"
        if self.cause is not None:
            return f"claude: {self.message}: {self.cause}"
        return f"claude: {self.message}"


class ParseError(Exception):
    """Output that could not be read as stream-json."""

    def __init__(self, message: str, *, line: str = "", cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.cause = cause
        self.__cause__ = cause

    def __str__(self) -> str:
        if self.line and self.cause is not None:
            return (
                f"parse error: {self.message}: {self.cause} "
                f"(line: {_quote(truncate_line(self.line, 100))})"
            )
        if self.line:
            return f"parse error: {self.message} (line: {_quote(truncate_line(self.line, 100))})"
        if self.cause is not None:
            return f"parse error: {self.message}: {self.cause}"
        return f"parse error: {self.message}"