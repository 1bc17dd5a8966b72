#!/usr/bin/env python3
"""
Base64 Encoder/Decoder - Alphabet Tables
The two RFC 4648 alphabets: standard ('+', '/') and URL-safe ('-', '_').
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Union

try:
    from .exceptions import ConfigurationError
except ImportError:
    from exceptions import ConfigurationError


PADDING = "="

# Values 0-61 are shared by both alphabets
_SHARED_SYMBOLS = (
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "abcdefghijklmnopqrstuvwxyz"
    "0123456789"
)


class Alphabet(Enum):
    """Alphabet variant, value is the pair of symbols for 62 and 63"""
    STANDARD = "+/"
    URL_SAFE = "-_"

    def __str__(self) -> str:
        return "standard" if self is Alphabet.STANDARD else "urlsafe"


_ALPHABET_NAMES = {
    "standard": Alphabet.STANDARD,
    "std": Alphabet.STANDARD,
    "urlsafe": Alphabet.URL_SAFE,
    "url-safe": Alphabet.URL_SAFE,
    "url_safe": Alphabet.URL_SAFE,
    "url": Alphabet.URL_SAFE,
}


@dataclass(frozen=True)
class AlphabetTable:
    """Bidirectional 6-bit value <-> symbol mapping for one alphabet"""
    alphabet: Alphabet
    symbols: str
    padding: str = PADDING
    reverse: Dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if len(self.symbols) != 64 or len(set(self.symbols)) != 64:
            raise ValueError("an alphabet needs 64 distinct symbols")
        if self.padding in self.symbols:
            raise ValueError(f"padding {self.padding!r} must not be an alphabet symbol")
        object.__setattr__(self, "reverse", {c: i for i, c in enumerate(self.symbols)})

    def value_to_char(self, value: int) -> str:
        if not 0 <= value < 64:
            raise ValueError(f"value {value} is outside the 6-bit range")
        return self.symbols[value]

    def char_to_value(self, char: str) -> Optional[int]:
        return self.reverse.get(char)

    def __contains__(self, char: str) -> bool:
        return char in self.reverse


_TABLES = {
    alphabet: AlphabetTable(alphabet=alphabet, symbols=_SHARED_SYMBOLS + alphabet.value)
    for alphabet in Alphabet
}


def get_table(alphabet: Alphabet = Alphabet.STANDARD) -> AlphabetTable:
    """Return the shared, immutable table for an alphabet variant."""
    return _TABLES[Alphabet(alphabet)]


def parse_alphabet(name: Union[str, Alphabet]) -> Alphabet:
    """Resolve an alphabet from user input.

    Args:
        name: 'standard' or 'urlsafe' (case-insensitive, a few spellings
            accepted), or an Alphabet member which is returned as is

    Returns:
        Alphabet

    Raises:
        ConfigurationError: when the name is not a known alphabet
    """
    if isinstance(name, Alphabet):
        return name
    key = str(name).strip().lower()
    if key not in _ALPHABET_NAMES:
        raise ConfigurationError(
            f"Invalid alphabet {name!r}, use either 'standard' or 'urlsafe'",
            param_name="alphabet",
        )
    return _ALPHABET_NAMES[key]
