"""Nanote: send short notes inside the value of a Nano transaction."""

from .amount import (
    BelowMinimumError,
    ChecksumMismatchError,
    MalformedAmountError,
    format_amount,
    format_raw_amount,
    parse_amount,
    parse_raw_amount,
)
from .base_codec import CharsetCoverageError, b10_decode, b10_encode
from .charsets import CharsetCatalog, generate_charsets
from .checksum import ChecksumError, calculate_checksum, validate_checksum
from .config import ConfigurationError, EngineConfig, load_engine_config
from .engine import IndexOutOfRangeError, Nanote, new_engine
from .model import Failure, FailureReason, NanoteError, ParsedAmount, ProtocolParameters

__all__ = [
    "Nanote",
    "new_engine",
    "IndexOutOfRangeError",
    "Failure",
    "FailureReason",
    "NanoteError",
    "ParsedAmount",
    "ProtocolParameters",
    "CharsetCatalog",
    "generate_charsets",
    "CharsetCoverageError",
    "b10_decode",
    "b10_encode",
    "ChecksumError",
    "calculate_checksum",
    "validate_checksum",
    "BelowMinimumError",
    "ChecksumMismatchError",
    "MalformedAmountError",
    "format_amount",
    "format_raw_amount",
    "parse_amount",
    "parse_raw_amount",
    "ConfigurationError",
    "EngineConfig",
    "load_engine_config",
]
