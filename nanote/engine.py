"""Nanote engine: encode short notes as Nano amounts and back.

The engine never touches the network. It turns text into an amount string
that some wallet code may later send, and turns an observed amount string back
into text. Every operation is pure; the only state is the charset catalog
built when the engine is created.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

from . import base_codec, checksum
from .amount import (
    format_amount,
    format_raw_amount,
    parse_amount,
    parse_raw_amount,
)
from .charsets import CharsetCatalog
from .config import ConfigurationError, EngineConfig
from .model import (
    Failure,
    FailureReason,
    NanoteError,
    ParsedAmount,
    ProtocolParameters,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class IndexOutOfRangeError(NanoteError):
    """Raised when an amount names a charset the catalog does not have."""

    reason = FailureReason.INDEX_OUT_OF_RANGE


class Nanote:
    """Encode and decode notes carried in the value of a Nano transaction.

    Public operations return a :class:`~nanote.model.Failure` instead of
    raising when the input cannot be handled. ``verbose`` only raises the
    log level of diagnostic messages; it never changes a result.
    """

    def __init__(
        self,
        verbose: bool = False,
        *,
        params: ProtocolParameters | None = None,
        catalog: CharsetCatalog | None = None,
    ) -> None:
        self.verbose = verbose
        self.params = params or ProtocolParameters.nanote_default()
        self.catalog = catalog if catalog is not None else CharsetCatalog.build()
        if self.params.charset_index_length < 1:
            raise ConfigurationError("charset_index_length must be at least 1")
        if self.params.charset_index_length + 1 >= self.params.total_width:
            raise ConfigurationError(
                f"a {self.params.charset_index_length}-digit index and checksum leave no "
                f"value digits in a {self.params.total_width}-digit amount"
            )
        if len(self.catalog) > self.params.max_catalog_size:
            raise ConfigurationError(
                f"{len(self.catalog)} charsets do not fit in a "
                f"{self.params.charset_index_length}-digit index"
            )

    @classmethod
    def from_config(cls, config: EngineConfig) -> "Nanote":
        params = ProtocolParameters(
            minimum_raw=config.minimum_raw,
            charset_index_length=config.charset_index_length,
        )
        return cls(verbose=config.verbose, params=params)

    @property
    def charsets(self) -> tuple[str, ...]:
        return self.catalog.charsets

    def _log(self, level: int, msg: str, *args: Any) -> None:
        logger.log(level if self.verbose else logging.DEBUG, msg, *args)

    def _guard(self, action: str, func: Callable[[], T]) -> T | Failure:
        try:
            return func()
        except NanoteError as exc:
            failure = Failure.from_error(exc)
            self._log(logging.WARNING, "Failed to %s: %s", action, failure)
            return failure

    # Selector and codec helpers -------------------------------------------------

    def shortest_charset(self, text: str) -> int:
        """Return the index of the smallest charset covering ``text`` or ``-1``."""

        if not isinstance(text, str):
            return -1
        index = self.catalog.shortest_index(text)
        return -1 if index is None else index

    def calculate_checksum(self, digits: Any) -> str | Failure:
        return self._guard("calculate checksum", lambda: checksum.calculate_checksum(digits))

    def validate_checksum(self, digits: Any, digit: Any) -> bool:
        return checksum.validate_checksum(digits, digit)

    def b10_encode(self, text: str, charset: str) -> int:
        return base_codec.b10_encode(text, charset)

    def b10_decode(self, value: int, charset: str) -> str:
        return base_codec.b10_decode(value, charset)

    # Encoding -------------------------------------------------------------------

    def _encode_value(self, text: Any) -> tuple[int, int]:
        if not isinstance(text, str):
            raise NanoteError(
                f"text must be a string, got {type(text).__name__}",
                reason=FailureReason.INVALID_INPUT_TYPE,
            )
        index = self.catalog.shortest_index(text)
        if index is None:
            missing = "".join(sorted(set(text).difference(*self.catalog)))
            raise base_codec.CharsetCoverageError(f"no charset contains {missing!r}")
        charset = self.catalog[index]
        self._log(logging.INFO, "Encoding with charset (%d): %s", index, charset)
        return base_codec.b10_encode(text, charset), index

    def encode(self, text: str) -> str | Failure:
        """Encode ``text`` as a display amount such as ``0.0001...``."""

        return self._guard(
            "encode", lambda: format_amount(*self._encode_value(text), self.params)
        )

    def encode_raw(self, text: str) -> str | Failure:
        """Encode ``text`` as a digit-only raw amount."""

        return self._guard(
            "encode", lambda: format_raw_amount(*self._encode_value(text), self.params)
        )

    # Decoding -------------------------------------------------------------------

    def _decode_parsed(self, parsed: ParsedAmount) -> str:
        charset = self._charset_at(parsed.charset_index)
        self._log(logging.INFO, "Decoding with charset (%d): %s", parsed.charset_index, charset)
        return base_codec.b10_decode(parsed.value, charset)

    def _charset_at(self, index: int) -> str:
        if index >= len(self.catalog):
            raise IndexOutOfRangeError(
                f"charset index {index} exceeds the {len(self.catalog)} known charsets"
            )
        return self.catalog[index]

    def decode(self, amount: str) -> str | Failure:
        """Decode a display amount back into text."""

        return self._guard(
            "decode", lambda: self._decode_parsed(parse_amount(amount, self.params))
        )

    def decode_raw(self, amount: str) -> str | Failure:
        """Decode a raw amount back into text."""

        return self._guard(
            "decode", lambda: self._decode_parsed(parse_raw_amount(amount, self.params))
        )

    def inspect(self, amount: str, *, raw: bool = False) -> tuple[ParsedAmount, str] | Failure:
        """Return the parsed fields of ``amount`` and the charset they select."""

        def _inspect() -> tuple[ParsedAmount, str]:
            parse = parse_raw_amount if raw else parse_amount
            parsed = parse(amount, self.params)
            return parsed, self._charset_at(parsed.charset_index)

        return self._guard("inspect", _inspect)


def new_engine(verbose: bool = False) -> Nanote:
    """Build an engine with the reference protocol parameters."""

    return Nanote(verbose=verbose)
