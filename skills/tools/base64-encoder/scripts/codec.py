#!/usr/bin/env python3
"""
Base64 Encoder/Decoder - Codec Engine
Bytes <-> base64 text for the standard and URL-safe alphabets.

Every function here is pure: the alphabet tables are immutable and each
call builds its own output, so calls from several threads need no locking.

Decoding is strict. Text is rejected when it contains a symbol outside the
alphabet, padding anywhere but the end, a padding count that does not fit
the last group, a single dangling symbol, or non-zero bits under the
padding. Unpadded text whose last group has 2 or 3 symbols is accepted.
"""

from typing import BinaryIO, Union

try:
    from .alphabet import Alphabet, get_table
    from .exceptions import (
        DecodeError,
        InvalidCharacterError,
        InvalidLengthError,
        MalformedPaddingError,
    )
    from .logger import get_logger
    from .models import DecodeResult
except ImportError:
    from alphabet import Alphabet, get_table
    from exceptions import (
        DecodeError,
        InvalidCharacterError,
        InvalidLengthError,
        MalformedPaddingError,
    )
    from logger import get_logger
    from models import DecodeResult


BytesLike = Union[bytes, bytearray, memoryview, str]

logger = get_logger("codec")


def encoded_length(n: int, padding: bool = True) -> int:
    """Length of the base64 text for n input bytes."""
    if padding:
        return 4 * ((n + 2) // 3)
    return (4 * n + 2) // 3


def encode(data: BytesLike, alphabet: Alphabet = Alphabet.STANDARD, padding: bool = True) -> str:
    """Encode bytes to base64 text.

    Args:
        data: bytes-like object; str is encoded as UTF-8 first
        alphabet: Alphabet.STANDARD or Alphabet.URL_SAFE
        padding: append '=' so the length is a multiple of 4

    Returns:
        str: the encoded text, '' for empty input
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    elif not isinstance(data, bytes):
        data = memoryview(data).tobytes()

    table = get_table(alphabet)
    symbols = table.symbols
    n = len(data)
    full = n - n % 3

    chunks = []
    for i in range(0, full, 3):
        group = (data[i] << 16) | (data[i + 1] << 8) | data[i + 2]
        chunks.append(
            symbols[group >> 18]
            + symbols[(group >> 12) & 0x3F]
            + symbols[(group >> 6) & 0x3F]
            + symbols[group & 0x3F]
        )

    rest = n - full
    if rest == 1:
        group = data[full] << 16
        chunks.append(symbols[group >> 18] + symbols[(group >> 12) & 0x3F])
        if padding:
            chunks.append(table.padding * 2)
    elif rest == 2:
        group = (data[full] << 16) | (data[full + 1] << 8)
        chunks.append(
            symbols[group >> 18]
            + symbols[(group >> 12) & 0x3F]
            + symbols[(group >> 6) & 0x3F]
        )
        if padding:
            chunks.append(table.padding)

    logger.debug("encoded %d bytes with the %s alphabet", n, table.alphabet)
    return "".join(chunks)


def decode(text: Union[str, bytes], alphabet: Alphabet = Alphabet.STANDARD) -> bytes:
    """Decode base64 text to bytes.

    Args:
        text: the encoded text; bytes are read as latin-1, so any non-ASCII
            byte is reported as an invalid character
        alphabet: Alphabet.STANDARD or Alphabet.URL_SAFE

    Returns:
        bytes: the decoded data

    Raises:
        InvalidCharacterError: a symbol outside the alphabet
        InvalidLengthError: the text without padding has length % 4 == 1
        MalformedPaddingError: padding before data, a padding count that does
            not fit the last group, or non-zero bits under the padding
    """
    if isinstance(text, (bytes, bytearray, memoryview)):
        text = bytes(text).decode("latin-1")
    elif not isinstance(text, str):
        raise TypeError(f"expected str or bytes, got {type(text).__name__}")

    table = get_table(alphabet)
    pad = table.padding

    # At most two trailing padding characters belong to the last group
    body_len = len(text)
    pad_count = 0
    while pad_count < 2 and body_len and text[body_len - 1] == pad:
        body_len -= 1
        pad_count += 1

    reverse = table.reverse
    values = []
    for position in range(body_len):
        char = text[position]
        value = reverse.get(char)
        if value is None:
            if char == pad:
                raise MalformedPaddingError(
                    f"Padding character {pad!r} at position {position} comes before the end of the data",
                    position=position,
                )
            raise InvalidCharacterError(char, position)
        values.append(value)

    remainder = body_len % 4
    if remainder == 1:
        raise InvalidLengthError(body_len)
    if pad_count and (body_len + pad_count) % 4:
        raise MalformedPaddingError(
            f"{pad_count} padding character(s) cannot complete a final group of {remainder} symbol(s)"
        )

    out = bytearray()
    full = body_len - remainder
    for i in range(0, full, 4):
        group = (values[i] << 18) | (values[i + 1] << 12) | (values[i + 2] << 6) | values[i + 3]
        out.append(group >> 16)
        out.append((group >> 8) & 0xFF)
        out.append(group & 0xFF)

    if remainder == 2:
        first, second = values[full], values[full + 1]
        if second & 0x0F:
            raise MalformedPaddingError(
                f"Non-zero padding bits in symbol {text[full + 1]!r} at position {full + 1}",
                position=full + 1,
            )
        out.append((first << 2) | (second >> 4))
    elif remainder == 3:
        first, second, third = values[full], values[full + 1], values[full + 2]
        if third & 0x03:
            raise MalformedPaddingError(
                f"Non-zero padding bits in symbol {text[full + 2]!r} at position {full + 2}",
                position=full + 2,
            )
        group = (first << 10) | (second << 4) | (third >> 2)
        out.append(group >> 8)
        out.append(group & 0xFF)

    logger.debug("decoded %d symbols to %d bytes with the %s alphabet", len(text), len(out), table.alphabet)
    return bytes(out)


def decode_result(text: Union[str, bytes], alphabet: Alphabet = Alphabet.STANDARD) -> DecodeResult:
    """Like decode(), but returns a DecodeResult instead of raising."""
    try:
        return DecodeResult(success=True, data=decode(text, alphabet))
    except DecodeError as e:
        logger.debug("decode failed: %s", e)
        return DecodeResult(success=False, error=e)


def decode_to_string(
    text: Union[str, bytes],
    alphabet: Alphabet = Alphabet.STANDARD,
    encoding: str = "utf-8",
    errors: str = "strict",
) -> str:
    """Decode base64 text and then decode the bytes as text.

    Raises:
        DecodeError: the base64 is invalid
        UnicodeDecodeError: the bytes are not valid in the encoding (errors="strict")
    """
    return decode(text, alphabet).decode(encoding, errors)


def decode_into(text: Union[str, bytes], stream: BinaryIO, alphabet: Alphabet = Alphabet.STANDARD) -> int:
    """Decode base64 text and write the bytes to a binary stream.

    Nothing is written when the text is invalid.

    Returns:
        number of bytes written
    """
    data = decode(text, alphabet)
    stream.write(data)
    return len(data)


def without_padding(text: str, alphabet: Alphabet = Alphabet.STANDARD) -> str:
    """Drop every trailing padding character from encoded text.

    The padding is not validated, "TWFu===" gives "TWFu". Use decode() to check it.
    """
    return text.rstrip(get_table(alphabet).padding)


def change_alphabet(
    text: Union[str, bytes],
    source: Alphabet,
    target: Alphabet,
    padding: bool = True,
) -> str:
    """Re-encode text from one alphabet into another.

    Raises:
        DecodeError: text is not valid in the source alphabet
    """
    return encode(decode(text, source), target, padding=padding)
