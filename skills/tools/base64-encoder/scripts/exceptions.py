#!/usr/bin/env python3
"""
Base64 Encoder/Decoder - Exception Classes
Exception hierarchy for the transcoding engine and its command line.
"""

from enum import Enum


class Base64Error(Exception):
    """Base class - parent of every error raised by the tool"""

    def __init__(self, message: str, context: str = ""):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.context:
            return f"[{self.context}] {self.message}"
        return self.message


class DecodeErrorKind(Enum):
    """Kinds of decode failure"""
    INVALID_CHARACTER = "invalid_character"
    INVALID_LENGTH = "invalid_length"
    MALFORMED_PADDING = "malformed_padding"


class DecodeError(Base64Error):
    """Decode failure - raised when text is not valid base64 for the alphabet"""

    kind: DecodeErrorKind

    def __init__(self, message: str):
        super().__init__(message, context="decode")


class InvalidCharacterError(DecodeError):
    """A symbol outside the active alphabet

    Examples:
        - '!' or whitespace inside the text
        - '+' or '/' when decoding with the URL-safe alphabet
        - non-ASCII characters
    """

    kind = DecodeErrorKind.INVALID_CHARACTER

    def __init__(self, char: str, position: int):
        self.char = char
        self.position = position
        super().__init__(f"Invalid base64 character {char!r} at position {position}")


class InvalidLengthError(DecodeError):
    """Trimmed length leaves a single dangling symbol (length % 4 == 1)"""

    kind = DecodeErrorKind.INVALID_LENGTH

    def __init__(self, length: int):
        self.length = length
        super().__init__(
            f"Invalid base64 length {length}: a trailing group of one symbol cannot hold a byte"
        )


class MalformedPaddingError(DecodeError):
    """Padding in the wrong place, a padding count that does not fit the
    trailing group, or non-zero bits hidden under the padding.

    position is -1 when no single character is to blame.
    """

    kind = DecodeErrorKind.MALFORMED_PADDING

    def __init__(self, message: str, position: int = -1):
        self.position = position
        super().__init__(message)


class ConfigurationError(Base64Error):
    """Configuration error - raised for invalid command line input

    Examples:
        - unknown alphabet name
        - odd or non-hex digits with --hex
        - no input source
    """

    def __init__(self, message: str, param_name: str = ""):
        self.param_name = param_name
        super().__init__(message, context="config")
