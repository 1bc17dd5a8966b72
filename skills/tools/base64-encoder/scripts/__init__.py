# Base64 Encoder/Decoder
# Strict base64 transcoding with the standard and URL-safe alphabets

from .exceptions import (
    Base64Error,
    DecodeError,
    DecodeErrorKind,
    InvalidCharacterError,
    InvalidLengthError,
    MalformedPaddingError,
    ConfigurationError,
)

from .alphabet import (
    Alphabet,
    AlphabetTable,
    PADDING,
    get_table,
    parse_alphabet,
)

from .models import (
    DecodeResult,
    CodecConfig,
)

from .codec import (
    encode,
    decode,
    decode_result,
    decode_into,
    decode_to_string,
    without_padding,
    change_alphabet,
    encoded_length,
)

from .logger import (
    get_logger,
    setup_logging,
    get_user_friendly_message,
)

from .base64_encoder import (
    create_argument_parser,
    create_config_from_args,
    main,
)

__all__ = [
    # Exceptions
    'Base64Error',
    'DecodeError',
    'DecodeErrorKind',
    'InvalidCharacterError',
    'InvalidLengthError',
    'MalformedPaddingError',
    'ConfigurationError',
    # Alphabets
    'Alphabet',
    'AlphabetTable',
    'PADDING',
    'get_table',
    'parse_alphabet',
    # Models
    'DecodeResult',
    'CodecConfig',
    # Codec
    'encode',
    'decode',
    'decode_result',
    'decode_into',
    'decode_to_string',
    'without_padding',
    'change_alphabet',
    'encoded_length',
    # Logging
    'get_logger',
    'setup_logging',
    'get_user_friendly_message',
    # CLI
    'create_argument_parser',
    'create_config_from_args',
    'main',
]

__version__ = "0.1.0"
