#!/usr/bin/env python3
"""
Base64 Encoder/Decoder - Command Line Tests
"""

import io
import logging
import sys
from unittest.mock import patch

import pyperclip
import pytest

from .alphabet import Alphabet
from .base64_encoder import (
    EXIT_INVALID,
    EXIT_IO,
    EXIT_OK,
    create_argument_parser,
    create_config_from_args,
    format_output,
    main,
    parse_hex,
)
from .exceptions import ConfigurationError
from .logger import get_logger


@pytest.fixture(autouse=True)
def reset_logger():
    """main() installs handlers bound to the captured streams"""
    yield
    logger = get_logger()
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


def fake_stdin(monkeypatch, data: bytes):
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(data)))


class TestParseHex:
    """Hex input for encode --hex"""

    def test_even_digits(self):
        assert parse_hex("4d616e") == b"Man"

    def test_odd_digits_get_leading_zero(self):
        assert parse_hex("bff") == bytes([0x0B, 0xFF])

    def test_prefix_and_spaces(self):
        assert parse_hex("0x4D 61 6E") == b"Man"

    def test_invalid_digits(self):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_hex("zz")
        assert exc_info.value.param_name == "hex"


class TestFormatOutput:
    """Rendering of decoded bytes"""

    def test_text(self):
        assert format_output(b"Man") == "Man"
        assert format_output(b"\xff") == "�"

    def test_hex(self):
        assert format_output(b"Man", "hex") == "0x4D616E"

    def test_bits(self):
        assert format_output(b"M", "bits") == "01001101"
        assert format_output(b"\x01\x80", "bits") == "0000000110000000"


class TestConfig:
    """CodecConfig built from arguments"""

    def test_defaults(self):
        args = create_argument_parser().parse_args(["encode", "x"])
        config = create_config_from_args(args)
        assert config.alphabet is Alphabet.STANDARD
        assert config.padding is True
        assert config.output_format == "text"
        assert config.output_path is None
        assert config.log_level == "WARNING"

    def test_encode_options(self):
        args = create_argument_parser().parse_args(
            ["encode", "x", "-a", "urlsafe", "--no-padding", "-v"]
        )
        config = create_config_from_args(args)
        assert config.alphabet is Alphabet.URL_SAFE
        assert config.padding is False
        assert config.log_level == "DEBUG"

    def test_decode_output_formats(self):
        parser = create_argument_parser()
        assert create_config_from_args(parser.parse_args(["decode", "x", "-H"])).output_format == "hex"
        assert create_config_from_args(parser.parse_args(["decode", "x", "-b"])).output_format == "bits"
        assert create_config_from_args(parser.parse_args(["decode", "x", "-q"])).log_level == "ERROR"

    def test_hex_and_bits_are_exclusive(self):
        with pytest.raises(SystemExit):
            create_argument_parser().parse_args(["decode", "x", "--hex", "--bits"])

    def test_unknown_alphabet(self):
        args = create_argument_parser().parse_args(["decode", "x", "-a", "base32"])
        with pytest.raises(ConfigurationError):
            create_config_from_args(args)


class TestEncodeCommand:
    """baze64 encode"""

    def test_text(self, capsys):
        assert main(["encode", "Man"]) == EXIT_OK
        assert capsys.readouterr().out == "TWFu\n"

    def test_url_safe_without_padding(self, capsys):
        assert main(["encode", "--hex", "fbff", "-a", "urlsafe", "--no-padding"]) == EXIT_OK
        assert capsys.readouterr().out == "-_8\n"

    def test_hex_input(self, capsys):
        assert main(["encode", "--hex", "bff"]) == EXIT_OK
        assert capsys.readouterr().out == "C/8=\n"

    def test_invalid_hex(self, capsys):
        assert main(["encode", "--hex", "zz"]) == EXIT_INVALID
        assert "Invalid hex input" in capsys.readouterr().err

    def test_hex_without_text(self, capsys):
        assert main(["encode", "--hex"]) == EXIT_INVALID
        assert "--hex" in capsys.readouterr().err

    def test_stdin(self, capsys, monkeypatch):
        fake_stdin(monkeypatch, b"Ma")
        assert main(["encode"]) == EXIT_OK
        assert capsys.readouterr().out == "TWE=\n"

    def test_file_to_file(self, tmp_path, capsys):
        source = tmp_path / "data.bin"
        source.write_bytes(bytes([0x00, 0xFB, 0xFF]))
        target = tmp_path / "data.b64"

        assert main(["encode", "-f", str(source), "-o", str(target), "-a", "urlsafe"]) == EXIT_OK
        assert target.read_text() == "APv_"
        assert str(target) in capsys.readouterr().out

    def test_missing_file(self, tmp_path, capsys):
        assert main(["encode", "-f", str(tmp_path / "missing.bin")]) == EXIT_IO
        assert capsys.readouterr().err.startswith("Error:")


class TestDecodeCommand:
    """baze64 decode"""

    def test_text(self, capsys):
        assert main(["decode", "SGVsbG8gV29ybGQ="]) == EXIT_OK
        assert capsys.readouterr().out == "Hello World\n"

    def test_hex_output(self, capsys):
        assert main(["decode", "TWFu", "--hex"]) == EXIT_OK
        assert capsys.readouterr().out == "0x4D616E\n"

    def test_bits_output(self, capsys):
        assert main(["decode", "TQ==", "--bits"]) == EXIT_OK
        assert capsys.readouterr().out == "01001101\n"

    def test_surrounding_whitespace_is_ignored(self, capsys, monkeypatch):
        fake_stdin(monkeypatch, b"TWFu\n")
        assert main(["decode"]) == EXIT_OK
        assert capsys.readouterr().out == "Man\n"

    @pytest.mark.parametrize("text,message", [
        ("TWFu!", "Invalid base64 character"),
        ("TWFu1", "Invalid base64 length"),
        ("TWF=u", "comes before the end of the data"),
    ])
    def test_invalid_input(self, text, message, capsys):
        assert main(["decode", text]) == EXIT_INVALID
        captured = capsys.readouterr()
        assert captured.out == ""
        assert message in captured.err

    def test_wrong_alphabet(self, capsys):
        assert main(["decode", "APv_"]) == EXIT_INVALID
        err = capsys.readouterr().err
        assert "'_'" in err
        assert "--alphabet" in err

    def test_unknown_alphabet(self, capsys):
        assert main(["decode", "TWFu", "-a", "nope"]) == EXIT_INVALID
        assert "Invalid alphabet" in capsys.readouterr().err

    def test_file_to_file(self, tmp_path):
        source = tmp_path / "data.b64"
        source.write_bytes(b"APv/\n")
        target = tmp_path / "data.bin"

        assert main(["decode", "-f", str(source), "-o", str(target)]) == EXIT_OK
        assert target.read_bytes() == bytes([0x00, 0xFB, 0xFF])

    def test_non_ascii_file(self, tmp_path, capsys):
        source = tmp_path / "data.b64"
        source.write_bytes(b"TW\xe9u")
        assert main(["decode", "-f", str(source)]) == EXIT_INVALID
        assert "Invalid base64 character" in capsys.readouterr().err

    @pytest.mark.parametrize("data", [b"TWFu\xa0", b"\x85TWFu", b"TWFu\xa0\n"])
    def test_non_ascii_whitespace_in_file_is_rejected(self, data, tmp_path, capsys):
        source = tmp_path / "data.b64"
        source.write_bytes(data)
        assert main(["decode", "-f", str(source)]) == EXIT_INVALID
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Invalid base64 character" in captured.err

    def test_non_ascii_whitespace_on_stdin_is_rejected(self, capsys, monkeypatch):
        fake_stdin(monkeypatch, b"TWFu\xa0")
        assert main(["decode"]) == EXIT_INVALID
        assert "Invalid base64 character '\\xa0' at position 4" in capsys.readouterr().err

    def test_unprintable_result_is_an_io_error(self, capsys, monkeypatch):
        monkeypatch.setattr(sys, "stdout", io.TextIOWrapper(io.BytesIO(), encoding="ascii"))
        # 0xFF renders as U+FFFD, which ascii cannot encode
        assert main(["decode", "/w=="]) == EXIT_IO
        err = capsys.readouterr().err
        assert err.startswith("Error:")
        assert "--hex" in err


class TestConvertCommand:
    """baze64 convert"""

    def test_url_safe_to_standard(self, capsys):
        assert main(["convert", "APv_", "--from", "urlsafe", "--to", "standard"]) == EXIT_OK
        assert capsys.readouterr().out == "APv/\n"

    def test_defaults_to_url_safe_target(self, capsys):
        assert main(["convert", "+/8=", "--no-padding"]) == EXIT_OK
        assert capsys.readouterr().out == "-_8\n"

    def test_unknown_source_alphabet(self, capsys):
        assert main(["convert", "TWFu", "--from", "nope"]) == EXIT_INVALID
        assert "Invalid alphabet" in capsys.readouterr().err


class TestClipboard:
    """--copy"""

    def test_copies_printed_result(self, capsys):
        with patch("pyperclip.copy") as mock_copy:
            assert main(["encode", "Man", "--copy"]) == EXIT_OK
        mock_copy.assert_called_once_with("TWFu")
        assert capsys.readouterr().out == "TWFu\n"

    def test_copies_rendered_decode_output(self):
        with patch("pyperclip.copy") as mock_copy:
            assert main(["decode", "TWFu", "-H", "-c"]) == EXIT_OK
        mock_copy.assert_called_once_with("0x4D616E")

    def test_no_copy_without_flag(self):
        with patch("pyperclip.copy") as mock_copy:
            assert main(["encode", "Man"]) == EXIT_OK
        mock_copy.assert_not_called()

    def test_clipboard_failure_is_a_warning(self, capsys):
        with patch("pyperclip.copy", side_effect=pyperclip.PyperclipException("no clipboard")):
            assert main(["encode", "Man", "--copy"]) == EXIT_OK
        captured = capsys.readouterr()
        assert captured.out == "TWFu\n"
        assert "Cannot copy to the clipboard: no clipboard" in captured.err


class TestLogging:
    """Log output of the command line"""

    def test_verbose_logs_to_stderr(self, capsys):
        assert main(["encode", "Man", "-v"]) == EXIT_OK
        captured = capsys.readouterr()
        assert captured.out == "TWFu\n"
        assert "Encoded 3 bytes into 4 symbols" in captured.err

    def test_log_file(self, tmp_path, capsys):
        log_file = tmp_path / "logs" / "baze64.log"
        assert main(["decode", "TWFu", "-v", "--log-file", str(log_file)]) == EXIT_OK
        content = log_file.read_text(encoding="utf-8")
        assert "Decoded 4 symbols into 3 bytes" in content
        assert "| DEBUG    |" in content
