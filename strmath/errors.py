"""string-math error types with source position info."""

from __future__ import annotations

from enum import Enum, auto


class ErrorKind(Enum):
    UNEXPECTED_CHARACTER = auto()
    UNCLOSED_GROUP = auto()
    MALFORMED_NUMBER = auto()
    UNKNOWN_IDENTIFIER = auto()
    TRAILING_INPUT = auto()
    NESTING_TOO_DEEP = auto()
    CONFIG = auto()


class StrMathError(Exception):
    kind: ErrorKind | None = None

    def __init__(self, message: str, position: int = -1):
        self.message = message
        self.position = position
        if position >= 0:
            super().__init__(f"{message} at index {position}")
        else:
            super().__init__(message)


class ParseError(StrMathError):
    pass


class UnexpectedCharacter(ParseError):
    kind = ErrorKind.UNEXPECTED_CHARACTER


class UnclosedGroup(ParseError):
    kind = ErrorKind.UNCLOSED_GROUP


class MalformedNumber(ParseError):
    kind = ErrorKind.MALFORMED_NUMBER


class UnknownIdentifier(ParseError):
    kind = ErrorKind.UNKNOWN_IDENTIFIER

    def __init__(self, message: str, name: str, position: int = -1):
        self.name = name
        super().__init__(message, position)


class TrailingInput(ParseError):
    kind = ErrorKind.TRAILING_INPUT


class NestingTooDeep(ParseError):
    kind = ErrorKind.NESTING_TOO_DEEP


class ConfigError(StrMathError):
    kind = ErrorKind.CONFIG
