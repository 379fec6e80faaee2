"""Single digit checksum protecting the charset index of an amount."""

from __future__ import annotations

import re
from typing import Any

from .model import FailureReason, NanoteError

_DIGITS_RE = re.compile(r"[0-9]+")
_DIGIT_RE = re.compile(r"[0-9]")


class ChecksumError(NanoteError):
    """Raised when a checksum cannot be computed for the given input."""


def calculate_checksum(digits: Any) -> str:
    """Return ``(sum(digits) + 1) % 10`` as a one character string."""

    if not isinstance(digits, str):
        raise ChecksumError(
            f"checksum input must be a string, got {type(digits).__name__}",
            reason=FailureReason.INVALID_INPUT_TYPE,
        )
    if not _DIGITS_RE.fullmatch(digits):
        raise ChecksumError(f"checksum input must contain only digits: {digits!r}")
    total = sum(int(digit) for digit in digits)
    return str((total + 1) % 10)


def validate_checksum(digits: Any, checksum: Any) -> bool:
    """Return ``True`` when ``checksum`` matches ``digits``; never raises."""

    if not isinstance(checksum, str) or not _DIGIT_RE.fullmatch(checksum):
        return False
    try:
        return calculate_checksum(digits) == checksum
    except ChecksumError:
        return False
