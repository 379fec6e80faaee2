"""Positional conversion between text and integers over a charset.

A charset of ``n`` symbols is treated as the digits ``1..n`` of a base
``n + 1`` number. Digit ``0`` is never produced, which lets the decoder stop
as soon as the remaining value is zero and makes the empty string map to 0.
"""

from __future__ import annotations

from typing import List

from .model import FailureReason, NanoteError


class CharsetCoverageError(NanoteError):
    """Raised when text contains a character missing from the charset."""

    reason = FailureReason.NO_COVERING_CHARSET


def b10_encode(text: str, charset: str) -> int:
    """Encode ``text`` as an integer using ``charset`` as the digit alphabet.

    >>> b10_encode("aa", "a")
    3
    """

    base = len(charset) + 1
    value = 0
    for char in text:
        position = charset.find(char)
        if position == -1:
            raise CharsetCoverageError(f"character {char!r} is not in charset {charset!r}")
        value = value * base + position + 1
    return value


def b10_decode(value: int, charset: str) -> str:
    """Decode an integer produced by :func:`b10_encode` back into text.

    Zero digits cannot come out of the encoder; if one shows up in a
    hand-crafted value it is skipped rather than mapped to a symbol.
    """

    if value < 0:
        raise NanoteError(f"cannot decode negative value {value}")
    base = len(charset) + 1
    chars: List[str] = []
    while value:
        value, digit = divmod(value, base)
        if digit:
            chars.append(charset[digit - 1])
    return "".join(reversed(chars))
