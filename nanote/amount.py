"""Fixed-width Nano amount layout for encoded notes.

An amount is the decimal rendering of ``value + minimum_offset`` followed by
the zero-padded charset index and a checksum digit over that index. The
digits are left-padded to ``decimals + 1`` characters; the display form puts
a decimal point before the last ``decimals`` digits, the raw form has none.

``0.000100000000000000000000020001`` reads as: value ``2`` on top of the
offset, charset index ``000`` and checksum ``1``.
"""

from __future__ import annotations

import re
from typing import Any, List

from .checksum import calculate_checksum, validate_checksum
from .model import FailureReason, NanoteError, ParsedAmount, ProtocolParameters


class MalformedAmountError(NanoteError):
    """Raised when an amount does not have the expected digit layout."""

    reason = FailureReason.MALFORMED_AMOUNT


class ChecksumMismatchError(NanoteError):
    """Raised when the embedded checksum does not match the charset index."""

    reason = FailureReason.CHECKSUM_MISMATCH


class BelowMinimumError(NanoteError):
    """Raised when an amount is smaller than the protocol floor."""

    reason = FailureReason.BELOW_MINIMUM_OFFSET


# Stays below the interpreter limit on int <-> str conversion (4300 digits).
_CHUNK_DIGITS = 1000
_CHUNK = 10**_CHUNK_DIGITS


def int_to_digits(value: int) -> str:
    """Render a non-negative int of any size as decimal digits."""

    chunks: List[str] = []
    while value >= _CHUNK:
        value, low = divmod(value, _CHUNK)
        chunks.append(str(low).zfill(_CHUNK_DIGITS))
    chunks.append(str(value))
    return "".join(reversed(chunks))


def digits_to_int(digits: str) -> int:
    """Parse a decimal digit string of any length."""

    value = 0
    for start in range(0, len(digits), _CHUNK_DIGITS):
        chunk = digits[start : start + _CHUNK_DIGITS]
        value = value * 10 ** len(chunk) + int(chunk)
    return value


def _require_str(amount: Any) -> str:
    if not isinstance(amount, str):
        raise MalformedAmountError(
            f"amount must be a string, got {type(amount).__name__}",
            reason=FailureReason.INVALID_INPUT_TYPE,
        )
    return amount


def format_raw_amount(value: int, charset_index: int, params: ProtocolParameters) -> str:
    """Return the digit-only amount for an encoded value."""

    if value < 0:
        raise MalformedAmountError(f"encoded value must not be negative: {value}")
    if charset_index < 0 or charset_index >= params.max_catalog_size:
        raise MalformedAmountError(
            f"charset index {charset_index} does not fit in {params.charset_index_length} digits"
        )

    index_digits = str(charset_index).zfill(params.charset_index_length)
    digits = (
        int_to_digits(value + params.minimum_offset)
        + index_digits
        + calculate_checksum(index_digits)
    )
    return digits.zfill(params.total_width)


def raw_to_display(raw: str, params: ProtocolParameters) -> str:
    """Insert the decimal point into a raw amount."""

    raw = raw.zfill(params.total_width)
    return raw[: -params.decimals] + "." + raw[-params.decimals :]


def display_to_raw(amount: str, params: ProtocolParameters) -> str:
    """Validate a display amount and return its digits without the point."""

    amount = _require_str(amount)
    if not re.fullmatch(r"[0-9]+\.[0-9]{%d}" % params.decimals, amount):
        raise MalformedAmountError(
            f"amount {amount!r} must have digits, a point and {params.decimals} decimals"
        )
    return amount.replace(".", "")


def format_amount(value: int, charset_index: int, params: ProtocolParameters) -> str:
    """Return the display amount (with decimal point) for an encoded value."""

    return raw_to_display(format_raw_amount(value, charset_index, params), params)


def parse_raw_amount(raw: str, params: ProtocolParameters) -> ParsedAmount:
    """Split a raw amount into value, charset index and checksum.

    The checksum is validated and the minimum offset removed from the value.
    """

    raw = _require_str(raw)
    if not re.fullmatch(r"[0-9]{%d,}" % params.total_width, raw):
        raise MalformedAmountError(
            f"raw amount {raw!r} must be at least {params.total_width} digits"
        )

    metadata_width = params.charset_index_length + 1
    checksum = raw[-1]
    index_digits = raw[-metadata_width:-1]
    if not validate_checksum(index_digits, checksum):
        raise ChecksumMismatchError(
            f"checksum {checksum} does not match charset index {index_digits}"
        )

    value_digits = raw[:-metadata_width]
    if not value_digits:
        raise MalformedAmountError(f"raw amount {raw!r} has no room for a value field")
    value = digits_to_int(value_digits) - params.minimum_offset
    if value < 0:
        raise BelowMinimumError(f"amount is below the minimum of {params.minimum_raw} raw")
    return ParsedAmount(value=value, charset_index=int(index_digits), checksum=checksum)


def parse_amount(amount: str, params: ProtocolParameters) -> ParsedAmount:
    """Parse a display amount; see :func:`parse_raw_amount`."""

    return parse_raw_amount(display_to_raw(amount, params), params)
