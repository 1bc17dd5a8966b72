#!/usr/bin/env python3
"""
Base64 Encoder/Decoder Tool
Strict RFC 4648 base64 with the standard and URL-safe alphabets.

Usage:
    python base64_encoder.py encode "Hello World"
    python base64_encoder.py encode --file image.png --alphabet urlsafe --no-padding
    python base64_encoder.py encode --hex 4d616e
    python base64_encoder.py decode "SGVsbG8gV29ybGQ="
    python base64_encoder.py decode "TWFu" --hex
    python base64_encoder.py decode --file image.b64 --output image.png
    python base64_encoder.py convert "APv_" --from urlsafe --to standard
"""

import argparse
import string
import sys
from pathlib import Path
from typing import List, Optional

import pyperclip

try:
    from .alphabet import parse_alphabet
    from .codec import change_alphabet, decode, encode
    from .exceptions import Base64Error, ConfigurationError
    from .logger import get_logger, get_user_friendly_message, setup_logging
    from .models import CodecConfig
except ImportError:
    from alphabet import parse_alphabet
    from codec import change_alphabet, decode, encode
    from exceptions import Base64Error, ConfigurationError
    from logger import get_logger, get_user_friendly_message, setup_logging
    from models import CodecConfig


EXIT_OK = 0
EXIT_INVALID = 1
EXIT_IO = 2

logger = get_logger("cli")


def parse_hex(text: str) -> bytes:
    """Parse hex digits into bytes, an odd count gets a leading 0."""
    digits = text.strip()
    if digits[:2].lower() == "0x":
        digits = digits[2:]
    digits = "".join(digits.split())
    if len(digits) % 2:
        digits = "0" + digits
    try:
        return bytes.fromhex(digits)
    except ValueError:
        raise ConfigurationError(f"Invalid hex input {text!r}", param_name="hex") from None


def format_output(data: bytes, output_format: str = "text") -> str:
    """Render decoded bytes for the terminal."""
    if output_format == "hex":
        return "0x" + data.hex().upper()
    if output_format == "bits":
        return "".join(f"{b:08b}" for b in data)
    return data.decode("utf-8", errors="replace")


def create_argument_parser() -> argparse.ArgumentParser:
    """Build the command line parser"""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--output', '-o', metavar='FILE', help='Write the result to FILE')
    common.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    common.add_argument('--quiet', '-q', action='store_true', help='Only log errors')
    common.add_argument('--log-file', metavar='FILE', help='Append log records to FILE')
    common.add_argument('--copy', '-c', action='store_true', help='Also copy the printed result to the clipboard')

    parser = argparse.ArgumentParser(
        prog="baze64",
        description="Base64 encode/decode",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s encode "Hello World"
  %(prog)s encode --file image.png -a urlsafe --no-padding
  %(prog)s decode "TWFu" --hex
        """
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    # Encode
    p_enc = subparsers.add_parser('encode', parents=[common], help='Encode to Base64')
    p_enc.add_argument('text', nargs='?', help='Text to encode (UTF-8)')
    p_enc.add_argument('--file', '-f', help='File to encode')
    p_enc.add_argument('--hex', '-x', action='store_true', help='TEXT is hex digits')
    p_enc.add_argument('--alphabet', '-a', default='standard', help='standard or urlsafe (default: standard)')
    p_enc.add_argument('--no-padding', action='store_true', help='Omit trailing =')

    # Decode
    p_dec = subparsers.add_parser('decode', parents=[common], help='Decode from Base64')
    p_dec.add_argument('text', nargs='?', help='Base64 to decode')
    p_dec.add_argument('--file', '-f', help='File containing Base64')
    p_dec.add_argument('--alphabet', '-a', default='standard', help='standard or urlsafe (default: standard)')
    fmt = p_dec.add_mutually_exclusive_group()
    fmt.add_argument('--hex', '-H', action='store_true', help='Print the bytes as hex')
    fmt.add_argument('--bits', '-b', action='store_true', help='Print the bytes as binary digits')

    # Convert
    p_conv = subparsers.add_parser('convert', parents=[common], help='Re-encode into the other alphabet')
    p_conv.add_argument('text', nargs='?', help='Base64 to convert')
    p_conv.add_argument('--file', '-f', help='File containing Base64')
    p_conv.add_argument('--from', dest='source', default='standard', help='Alphabet of the input')
    p_conv.add_argument('--to', dest='target', default='urlsafe', help='Alphabet of the output')
    p_conv.add_argument('--no-padding', action='store_true', help='Omit trailing =')

    return parser


def create_config_from_args(args: argparse.Namespace) -> CodecConfig:
    """Build a CodecConfig from parsed arguments

    Raises:
        ConfigurationError: unknown alphabet name
    """
    if args.verbose:
        log_level = "DEBUG"
    elif args.quiet:
        log_level = "ERROR"
    else:
        log_level = "WARNING"

    if getattr(args, 'hex', False) and args.command == 'decode':
        output_format = "hex"
    elif getattr(args, 'bits', False):
        output_format = "bits"
    else:
        output_format = "text"

    alphabet_name = args.target if args.command == 'convert' else args.alphabet

    config = CodecConfig(
        alphabet=parse_alphabet(alphabet_name),
        padding=not getattr(args, 'no_padding', False),
        output_format=output_format,
        output_path=args.output,
        log_level=log_level,
        log_file=args.log_file,
        copy=args.copy,
    )
    config.validate()
    return config


def read_binary_input(args: argparse.Namespace) -> bytes:
    if args.hex:
        if args.text is None:
            raise ConfigurationError("--hex needs the hex digits as TEXT", param_name="hex")
        return parse_hex(args.text)
    if args.file:
        return Path(args.file).read_bytes()
    if args.text is not None:
        return args.text.encode('utf-8')
    return sys.stdin.buffer.read()


def read_encoded_input(args: argparse.Namespace) -> str:
    # latin-1 keeps every byte, anything non-ASCII is then an invalid character.
    # Only ASCII whitespace is trimmed, str.strip() would also eat NBSP and NEL.
    if args.file:
        return Path(args.file).read_bytes().decode('latin-1').strip(string.whitespace)
    if args.text is not None:
        return args.text.strip(string.whitespace)
    return sys.stdin.buffer.read().decode('latin-1').strip(string.whitespace)


def show(result: str, config: CodecConfig) -> None:
    print(result)
    if config.copy:
        try:
            pyperclip.copy(result)
            logger.info("Copied result to the clipboard")
        except pyperclip.PyperclipException as e:
            # the result is already on stdout
            logger.warning(f"Cannot copy to the clipboard: {e}")


def write_text(result: str, config: CodecConfig) -> None:
    if config.output_path:
        Path(config.output_path).write_text(result, encoding='ascii')
        print(f"✓ Written to {config.output_path}")
    else:
        show(result, config)


def run_encode(args: argparse.Namespace, config: CodecConfig) -> int:
    data = read_binary_input(args)
    result = encode(data, config.alphabet, padding=config.padding)
    logger.info(f"Encoded {len(data)} bytes into {len(result)} symbols")
    write_text(result, config)
    return EXIT_OK


def run_decode(args: argparse.Namespace, config: CodecConfig) -> int:
    text = read_encoded_input(args)
    result = decode(text, config.alphabet)
    logger.info(f"Decoded {len(text)} symbols into {len(result)} bytes")

    if config.output_path:
        Path(config.output_path).write_bytes(result)
        print(f"✓ Decoded to {config.output_path}")
    else:
        show(format_output(result, config.output_format), config)
    return EXIT_OK


def run_convert(args: argparse.Namespace, config: CodecConfig) -> int:
    text = read_encoded_input(args)
    source = parse_alphabet(args.source)
    result = change_alphabet(text, source, config.alphabet, padding=config.padding)
    logger.info(f"Converted {source} to {config.alphabet}")
    write_text(result, config)
    return EXIT_OK


COMMANDS = {
    'encode': run_encode,
    'decode': run_decode,
    'convert': run_convert,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point

    Args:
        argv: argument list, None reads sys.argv

    Returns:
        exit code (0 ok, 1 invalid input, 2 I/O failure)
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    try:
        config = create_config_from_args(args)
    except ConfigurationError as e:
        print(f"Error: {get_user_friendly_message(e)}", file=sys.stderr)
        return EXIT_INVALID

    setup_logging(config.log_level, config.log_file)

    try:
        return COMMANDS[args.command](args, config)
    except Base64Error as e:
        # deterministic, retrying the same input cannot succeed
        logger.info(f"{args.command} failed: {type(e).__name__}")
        print(f"Error: {get_user_friendly_message(e)}", file=sys.stderr)
        return EXIT_INVALID
    except OSError as e:
        logger.info(f"{args.command} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_IO
    except UnicodeEncodeError as e:
        # the terminal cannot show the result, e.g. U+FFFD on a cp1252 console
        logger.info(f"{args.command} failed: {e}")
        print(f"Error: cannot write the result to this terminal ({e.encoding}), use --output or --hex",
              file=sys.stderr)
        return EXIT_IO


if __name__ == "__main__":
    sys.exit(main())
