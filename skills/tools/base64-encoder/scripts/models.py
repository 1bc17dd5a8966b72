#!/usr/bin/env python3
"""
Base64 Encoder/Decoder - Data Models
Result and configuration types
"""

from dataclasses import dataclass
from typing import Optional

try:
    from .alphabet import Alphabet
    from .exceptions import ConfigurationError, DecodeError
except ImportError:
    from alphabet import Alphabet
    from exceptions import ConfigurationError, DecodeError


OUTPUT_FORMATS = ("text", "hex", "bits")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# ============================================================================
# Result Models
# ============================================================================

@dataclass
class DecodeResult:
    """Decode result"""
    success: bool                      # whether decoding succeeded
    data: bytes = b""                  # decoded bytes, empty on failure
    error: Optional[DecodeError] = None  # the failure, if any

    @property
    def error_message(self) -> Optional[str]:
        return self.error.message if self.error else None


# ============================================================================
# Configuration Models
# ============================================================================

@dataclass
class CodecConfig:
    """Command line configuration

    output_format only applies to decode:
    - text: UTF-8, undecodable sequences replaced
    - hex: 0x followed by uppercase byte pairs
    - bits: eight binary digits per byte
    """
    alphabet: Alphabet = Alphabet.STANDARD
    padding: bool = True               # emit '=' padding when encoding
    output_format: str = "text"
    output_path: Optional[str] = None  # write to a file instead of stdout
    log_level: str = "WARNING"
    log_file: Optional[str] = None
    copy: bool = False                 # also put printed results on the clipboard

    def validate(self) -> None:
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigurationError(
                f"Unknown output format {self.output_format!r}, expected one of {', '.join(OUTPUT_FORMATS)}",
                param_name="output_format",
            )
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigurationError(
                f"Unknown log level {self.log_level!r}",
                param_name="log_level",
            )
