"""Charset catalog used to pick the smallest alphabet for a note.

The catalog is a fixed, ordered list of alphabets. Every alphabet starts with
a space and combines English letters (ordered by usage frequency), digits and
groups of punctuation. Entries are sorted by length so the first alphabet that
covers a note is also the smallest one, which keeps the encoded amount short.

The order and the number of entries are part of the wire format: an amount
carries the index of its alphabet, so the catalog must be rebuilt identically
by every reader.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Sequence

logger = logging.getLogger(__name__)

# Letters sorted by usage frequency in the English language.
LETTERS: str = "etaoinsrhldcumfpgwybvkxjqz"
LETTERS_NO_VOWELS: str = "tnsrhldcmfpgwbvkxjqz"
NUMBERS: str = "1234567890"

# The empty entry yields alphabets without punctuation.
PUNCTUATION: tuple[str, ...] = (
    "", "~", "!", "@", "#", "$", "%", "&", "*", "(", ")", "-", "_",
    "+", "=", ",", ".", "?", "/", "<", ">", ";", ":", "[", "]", "'",
)

PUNCTUATION_RUNS: tuple[int, ...] = (4, 8, 16)
LETTER_PREFIXES_WITH_NUMBERS: tuple[int, ...] = (10, 14, 18, 22, 26)
MIN_LETTER_PREFIX = 10


def punctuation_groupings() -> List[str]:
    """Return every punctuation grouping in emission order.

    The individual symbols come first, followed by contiguous runs of 4, 8 and
    16 characters cut from the joined punctuation string and finally the whole
    string. Runs that overlap an individual symbol are kept as duplicates.
    """

    joined = "".join(PUNCTUATION)
    groupings = list(PUNCTUATION)
    for run in PUNCTUATION_RUNS:
        # Step over the list length (26), not the joined length (25), so the
        # trailing single-symbol runs are emitted.
        for start in range(0, len(PUNCTUATION), run):
            groupings.append(joined[start : start + run])
    groupings.append(joined)
    return groupings


def _charsets_for_grouping(punc: str) -> Iterator[str]:
    for size in range(MIN_LETTER_PREFIX, len(LETTERS) + 1):
        yield " " + LETTERS[:size] + punc

    for size in LETTER_PREFIXES_WITH_NUMBERS:
        yield " " + LETTERS[:size] + NUMBERS + punc

    yield " " + LETTERS_NO_VOWELS + punc
    yield " " + LETTERS_NO_VOWELS + NUMBERS + punc

    yield " " + NUMBERS + punc


def generate_charsets() -> List[str]:
    """Generate the sorted list of charsets.

    ``sorted`` is stable, so charsets of equal length keep their emission
    order.
    """

    charsets: List[str] = []
    for punc in punctuation_groupings():
        charsets.extend(_charsets_for_grouping(punc))
    charsets = sorted(charsets, key=len)
    logger.debug("Generated %d charsets", len(charsets))
    return charsets


@dataclass(frozen=True)
class CharsetCatalog:
    """Immutable, index-addressable list of charsets."""

    charsets: tuple[str, ...]

    @classmethod
    def build(cls) -> "CharsetCatalog":
        return cls(charsets=tuple(generate_charsets()))

    def __len__(self) -> int:
        return len(self.charsets)

    def __getitem__(self, index: int) -> str:
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError(f"charset index must be an int, got {type(index).__name__}")
        if index < 0 or index >= len(self.charsets):
            raise IndexError(f"charset index {index} is outside 0..{len(self.charsets) - 1}")
        return self.charsets[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self.charsets)

    def shortest_index(self, text: str) -> int | None:
        """Return the index of the smallest charset covering ``text``.

        Returns ``None`` when no charset contains every character of ``text``.
        """

        required = set(text)
        for index, charset in enumerate(self.charsets):
            if required.issubset(charset):
                return index
        return None


def format_catalog_table(catalog: Sequence[str] | CharsetCatalog, limit: int | None = None) -> str:
    """Return a human-readable table of catalog entries."""

    lines = ["index | length | charset"]
    for index, charset in enumerate(catalog):
        if limit is not None and index >= limit:
            break
        lines.append(f"{index:03d} | {len(charset):>6} | {charset!r}")
    return "\n".join(lines)
