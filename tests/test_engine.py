"""Tests for the Nanote engine encode/decode surface."""

from __future__ import annotations

import logging
import re

import pytest

from nanote import Failure, FailureReason, Nanote, new_engine
from nanote.charsets import LETTERS, NUMBERS, PUNCTUATION, CharsetCatalog
from nanote.config import ConfigurationError, EngineConfig
from nanote.model import ProtocolParameters

VALID_CHARS = LETTERS + NUMBERS + "".join(PUNCTUATION)
AMOUNT_RE = re.compile(r"^\d+\.\d{30}$")


@pytest.fixture(scope="module")
def nanote() -> Nanote:
    return new_engine()


def test_catalog_fits_the_index_field(nanote: Nanote) -> None:
    assert len(nanote.charsets) <= 1000
    assert len(nanote.charsets) == 1000


def test_engines_build_identical_catalogs() -> None:
    first = new_engine()
    second = new_engine()

    assert first.charsets == second.charsets


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("e", "0.000100000000000000000000020001"),
        ("hello, world!", "0.000100476884084665303374619011"),
        ("hello world", "0.000100000001037200062838322553"),
        ("1", "0.000100000000000000000000020012"),
        ("2+2=4", "0.000100000000000000002467411462"),
        ("zz", "0.000100000000000000000004833363"),
        ("abc", "0.000100000000000000000024113341"),
        ("", "0.000100000000000000000000000001"),
    ],
)
def test_encode_reference_amounts(nanote: Nanote, text: str, expected: str) -> None:
    assert nanote.encode(text) == expected
    assert nanote.decode(expected) == text


def test_encode_raw_is_display_without_point(nanote: Nanote) -> None:
    raw = nanote.encode_raw("hello, world!")

    assert raw == "0000100476884084665303374619011"
    assert raw == nanote.encode("hello, world!").replace(".", "")
    assert len(raw) >= 31
    assert nanote.decode_raw(raw) == "hello, world!"


@pytest.mark.parametrize(
    "text",
    [VALID_CHARS, "the quick brown fox jumps over the lazy dog", "  leading", "trailing  ", "[x]:=y;"],
)
def test_round_trip(nanote: Nanote, text: str) -> None:
    encoded = nanote.encode(text)

    assert AMOUNT_RE.match(encoded)
    assert nanote.decode(encoded) == text
    assert nanote.decode_raw(nanote.encode_raw(text)) == text


def test_shortest_charset_surface(nanote: Nanote) -> None:
    assert nanote.shortest_charset("e") == 0
    assert nanote.shortest_charset(VALID_CHARS) == len(nanote.charsets) - 1
    assert nanote.shortest_charset("\\") == -1
    assert nanote.shortest_charset(None) == -1


def test_encode_rejects_unsupported_characters(nanote: Nanote) -> None:
    result = nanote.encode("\\")

    assert isinstance(result, Failure)
    assert not result
    assert result.reason is FailureReason.NO_COVERING_CHARSET
    assert "\\" in result.detail


@pytest.mark.parametrize("value", [None, 42, b"hello", ["h"]])
def test_encode_rejects_non_string_input(nanote: Nanote, value: object) -> None:
    assert nanote.encode(value) == Failure(
        FailureReason.INVALID_INPUT_TYPE, f"text must be a string, got {type(value).__name__}"
    )
    assert nanote.encode_raw(value).reason is FailureReason.INVALID_INPUT_TYPE


@pytest.mark.parametrize(
    ("amount", "reason"),
    [
        ("0.000100000000000000000000020002", FailureReason.CHECKSUM_MISMATCH),
        ("0.000000000000000000000000020001", FailureReason.BELOW_MINIMUM_OFFSET),
        ("0.0001", FailureReason.MALFORMED_AMOUNT),
        ("hello", FailureReason.MALFORMED_AMOUNT),
        (None, FailureReason.INVALID_INPUT_TYPE),
    ],
)
def test_decode_failures_are_distinguishable(nanote: Nanote, amount: object, reason: FailureReason) -> None:
    result = nanote.decode(amount)

    assert isinstance(result, Failure)
    assert result.reason is reason


def test_decode_raw_failures(nanote: Nanote) -> None:
    assert nanote.decode_raw("123").reason is FailureReason.MALFORMED_AMOUNT
    assert nanote.decode_raw("0000100000000000000000000020002").reason is FailureReason.CHECKSUM_MISMATCH
    assert nanote.decode_raw("0000000000000000000000000020001").reason is FailureReason.BELOW_MINIMUM_OFFSET


def test_decode_reports_index_outside_catalog() -> None:
    engine = Nanote(catalog=CharsetCatalog(charsets=(" e",)))

    result = engine.decode("0.000100000000000000000000000012")

    assert isinstance(result, Failure)
    assert result.reason is FailureReason.INDEX_OUT_OF_RANGE


def test_checksum_helpers(nanote: Nanote) -> None:
    assert nanote.calculate_checksum("0") == "1"
    assert nanote.calculate_checksum("999") == "8"
    assert nanote.calculate_checksum("900") == "0"
    assert nanote.calculate_checksum("").reason is FailureReason.MALFORMED_AMOUNT
    assert nanote.calculate_checksum(900).reason is FailureReason.INVALID_INPUT_TYPE
    assert nanote.validate_checksum("999", "8") is True
    assert nanote.validate_checksum("999", 8) is False


def test_b10_helpers(nanote: Nanote) -> None:
    assert nanote.b10_encode("a", "a") == 1
    assert nanote.b10_encode("aa", "a") == 3
    assert nanote.b10_decode(1, "a") == "a"
    assert nanote.b10_decode(3, "a") == "aa"


def test_inspect_reports_fields(nanote: Nanote) -> None:
    parsed, charset = nanote.inspect("0.000100476884084665303374619011")

    assert parsed.charset_index == 901
    assert charset == nanote.charsets[901]
    assert nanote.inspect("0.0001").reason is FailureReason.MALFORMED_AMOUNT


def test_verbose_logs_without_changing_results(caplog: pytest.LogCaptureFixture) -> None:
    quiet = new_engine()
    chatty = new_engine(verbose=True)

    with caplog.at_level(logging.INFO, logger="nanote.engine"):
        assert chatty.encode("e") == quiet.encode("e")
        assert chatty.decode("bogus") == quiet.decode("bogus")

    messages = [record.getMessage() for record in caplog.records]
    assert "Encoding with charset (0):  etaoinsrhl" in messages
    assert any(message.startswith("Failed to decode") for message in messages)


def test_custom_parameters_change_the_offset() -> None:
    params = ProtocolParameters(minimum_raw=10**20, charset_index_length=3)
    engine = Nanote(params=params, catalog=CharsetCatalog.build())

    encoded = engine.encode("e")

    assert encoded == "0.000000000100000000000000020001"
    assert engine.decode(encoded) == "e"


def test_from_config_uses_protocol_settings() -> None:
    engine = Nanote.from_config(EngineConfig(verbose=True, minimum_raw=10**26, charset_index_length=4))

    assert engine.verbose is True
    assert engine.params.minimum_offset == 10**21
    assert engine.decode(engine.encode("hello")) == "hello"


def test_catalog_must_fit_index_width() -> None:
    params = ProtocolParameters(minimum_raw=10**26, charset_index_length=2)

    with pytest.raises(ConfigurationError):
        Nanote(params=params)


def test_long_message_round_trip(nanote: Nanote) -> None:
    text = "hello world " * 400

    encoded = nanote.encode(text)

    assert isinstance(encoded, str)
    assert len(encoded) > 4300
    assert nanote.decode(encoded) == text
    assert nanote.decode_raw(nanote.encode_raw(text)) == text


def test_oversized_amount_decodes_or_fails_cleanly(nanote: Nanote) -> None:
    valid = "1" * 5000 + "." + "0" * 29 + "1"
    corrupted = "1" * 5000 + "." + "0" * 29 + "2"

    assert isinstance(nanote.decode(valid), str)
    assert nanote.decode(corrupted).reason is FailureReason.CHECKSUM_MISMATCH


def test_index_width_must_leave_room_for_value() -> None:
    params = ProtocolParameters(minimum_raw=10**26, charset_index_length=30)

    with pytest.raises(ConfigurationError):
        Nanote(params=params)


def test_prebuilt_catalog_is_not_reported_as_generated(caplog: pytest.LogCaptureFixture) -> None:
    catalog = CharsetCatalog.build()

    with caplog.at_level(logging.DEBUG, logger="nanote"):
        Nanote(verbose=True, catalog=catalog)

    assert not any("Generated" in record.getMessage() for record in caplog.records)
