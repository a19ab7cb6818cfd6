"""Shared exceptions for the dtvisual package."""

from __future__ import annotations


class DecodeError(ValueError):
    """Exception raised when an xUnit report cannot be decoded.

    The message is the underlying XML parser's diagnostic, unmodified.
    ``position`` holds the ``(line, column)`` reported by the parser, when
    the parser reported one.
    """

    def __init__(self, message: str, position: tuple[int, int] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.position = position
