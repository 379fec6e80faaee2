"""Domain models shared by the Nanote encoding engine.

The values defined here describe the protocol constants used to place an
encoded note inside a Nano amount and the uniform failure value returned by
the engine when a note cannot be encoded or an amount cannot be decoded.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FailureReason(str, Enum):
    """Why an encode or decode request was rejected."""

    INVALID_INPUT_TYPE = "invalid_input_type"
    NO_COVERING_CHARSET = "no_covering_charset"
    CHECKSUM_MISMATCH = "checksum_mismatch"
    MALFORMED_AMOUNT = "malformed_amount"
    BELOW_MINIMUM_OFFSET = "below_minimum_offset"
    INDEX_OUT_OF_RANGE = "index_out_of_range"


class NanoteError(ValueError):
    """Base error raised by the encoding components.

    Every subclass carries a :class:`FailureReason` so the engine can turn the
    exception into a :class:`Failure` without inspecting messages.
    """

    reason: FailureReason = FailureReason.MALFORMED_AMOUNT

    def __init__(self, message: str, *, reason: FailureReason | None = None) -> None:
        super().__init__(message)
        if reason is not None:
            self.reason = reason


@dataclass(frozen=True)
class Failure:
    """Negative result returned by :class:`nanote.engine.Nanote` operations.

    A failure is falsy, so callers may write ``if not result`` to detect it.
    """

    reason: FailureReason
    detail: str = ""

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        if self.detail:
            return f"{self.reason.value}: {self.detail}"
        return self.reason.value

    @classmethod
    def from_error(cls, error: NanoteError) -> "Failure":
        return cls(reason=error.reason, detail=str(error))


@dataclass(frozen=True)
class ProtocolParameters:
    """Constants describing how an encoded value is laid out in an amount."""

    minimum_raw: int
    charset_index_length: int
    decimals: int = 30

    @property
    def minimum_offset(self) -> int:
        """Offset added to the encoded value before the metadata digits.

        The value is shifted left by the index and checksum digits, so the
        offset is ``minimum_raw`` scaled down by the same number of places.
        """

        return self.minimum_raw // 10 ** (self.charset_index_length + 1)

    @property
    def total_width(self) -> int:
        return self.decimals + 1

    @property
    def max_catalog_size(self) -> int:
        return 10**self.charset_index_length

    @classmethod
    def nanote_default(cls) -> "ProtocolParameters":
        """Return the reference protocol: 0.0001 Nano floor, 3-digit index."""

        return cls(minimum_raw=10**26, charset_index_length=3, decimals=30)


@dataclass(frozen=True)
class ParsedAmount:
    """Fields recovered from a formatted amount."""

    value: int
    charset_index: int
    checksum: str
